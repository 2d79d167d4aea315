"""Filesystem calls whose errors say what failed and on which path.

``fs_err`` mirrors ``open``/``os``/``shutil``/``pathlib``; results are passed
through unchanged and every ``OSError`` is re-raised with the operation and
path(s) in its message, keeping its original class and errno.
"""

import logging

from fs_err.dir import DirBuilder, DirEntry, FileType, ReadDir, read_dir
from fs_err.errors import (
    ConfigurationError,
    ContextualError,
    DualPathError,
    ErrorKind,
    FsErrError,
    FsError,
    SourceDestErrorKind,
    get_payload,
)
from fs_err.file import File, FileRef
from fs_err.open_options import OpenOptions
from fs_err.operations import (
    canonicalize,
    copy,
    create_dir,
    create_dir_all,
    exists,
    hard_link,
    metadata,
    read,
    read_link,
    read_to_string,
    remove_dir,
    remove_dir_all,
    remove_file,
    rename,
    set_permissions,
    soft_link,
    symlink_metadata,
    write,
)
from fs_err.path import Path, PathExt
from fs_err.shared import configure, get_settings, reset_settings

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "ContextualError",
    "DirBuilder",
    "DirEntry",
    "DualPathError",
    "ErrorKind",
    "File",
    "FileRef",
    "FileType",
    "FsErrError",
    "FsError",
    "OpenOptions",
    "Path",
    "PathExt",
    "ReadDir",
    "SourceDestErrorKind",
    "canonicalize",
    "configure",
    "copy",
    "create_dir",
    "create_dir_all",
    "exists",
    "get_payload",
    "get_settings",
    "hard_link",
    "metadata",
    "read",
    "read_dir",
    "read_link",
    "read_to_string",
    "remove_dir",
    "remove_dir_all",
    "remove_file",
    "rename",
    "reset_settings",
    "set_permissions",
    "soft_link",
    "symlink_metadata",
    "write",
]
