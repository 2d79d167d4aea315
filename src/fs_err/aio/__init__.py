"""Async counterparts of the fs_err functions and types, over ``aiofiles``."""

from fs_err.aio.dir_builder import DirBuilder
from fs_err.aio.file import File
from fs_err.aio.open_options import OpenOptions
from fs_err.aio.operations import (
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
    symlink_metadata,
    write,
)
from fs_err.aio.read_dir import DirEntry, ReadDir, read_dir

__all__ = [
    "DirBuilder",
    "DirEntry",
    "File",
    "OpenOptions",
    "ReadDir",
    "canonicalize",
    "copy",
    "create_dir",
    "create_dir_all",
    "exists",
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
    "set_permissions",
    "symlink_metadata",
    "write",
]
