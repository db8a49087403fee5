"""slick - asynchronous zsh prompt backed by pygit2."""

__version__ = "0.1.0"
