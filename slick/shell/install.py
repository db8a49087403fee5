import shlex
import sys
from importlib import resources


def render_shell_init() -> str:
    py = shlex.quote(sys.executable)
    # Load the zsh hook template from package resources and substitute __PY__
    with resources.files("slick.shell").joinpath("slick.zsh").open("r", encoding="utf-8") as f:
        tpl = f.read()
    return tpl.replace("__PY__", py)


def main() -> None:
    print(render_shell_init())


if __name__ == "__main__":
    main()
