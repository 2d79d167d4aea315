import os

CONFIG_PATH_ENV = "FS_ERR_CONFIG"
INLINE_CAUSE_ENV = "FS_ERR_INLINE_CAUSE"
LOG_FAILURES_ENV = "FS_ERR_LOG_FAILURES"

CONFIG_SECTION = "fs_err"

TRUTHY_VALUES = frozenset({"1", "true", "yes", "on"})
FALSY_VALUES = frozenset({"0", "false", "no", "off", ""})

CAUSE_INDENT = "    "

# Same defaults the platform uses when creating files and directories.
DEFAULT_FILE_MODE = 0o666
DEFAULT_DIR_MODE = 0o777

# O_BINARY and O_NOINHERIT only exist on Windows; O_CLOEXEC only on POSIX.
BINARY_FLAG = getattr(os, "O_BINARY", 0)
NOINHERIT_FLAG = getattr(os, "O_CLOEXEC", 0) | getattr(os, "O_NOINHERIT", 0)
