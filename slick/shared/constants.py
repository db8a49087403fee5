# Application subfolder under the cache home
APP_NAME = "slick"

# Cache filenames are AUTH_CACHE_PREFIX + lowercase hex hash of the repo workdir
AUTH_CACHE_PREFIX = "auth_"

# Branch label when HEAD is detached or unborn
NO_BRANCH = "(no branch)"

# In-progress operation labels
ACTION_REBASE = "rebase"
ACTION_AM = "am"
ACTION_AM_REBASE = "am/rebase"
ACTION_REBASE_I = "rebase-i"
ACTION_REBASE_M = "rebase-m"
ACTION_MERGE = "merge"
ACTION_BISECT = "bisect"
ACTION_CHERRY_SEQ = "cherry-seq"
ACTION_CHERRY = "cherry"
ACTION_CHERRY_OR_REVERT = "cherry-or-revert"

# Lower-cased stderr fragments that mark a fetch as an authentication failure
AUTH_FAILURE_MARKERS = (
    "permission denied",
    "authentication failed",
    "could not read",
    "repository not found",
    "access denied",
)

# Branches rendered in the "master" color
MASTER_BRANCHES = {"master", "main"}

# Keymap name zsh reports while in vi command mode
VICMD_KEYMAP = "vicmd"

FALLBACK_REMOTE = "origin"
