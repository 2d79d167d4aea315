import errno
import io
import os
import sys
from typing import Self

from fs_err.errors import ErrorKind, StrPath, wrap_errors
from fs_err.file import File
from fs_err.shared.constants import BINARY_FLAG, NOINHERIT_FLAG

if sys.platform == "win32":
    from fs_err.windows import OpenOptionsExt as _PlatformOpenOptionsExt
else:
    from fs_err.unix import OpenOptionsExt as _PlatformOpenOptionsExt


def _invalid_input() -> OSError:
    return OSError(errno.EINVAL, os.strerror(errno.EINVAL))


class OpenOptionsBase:
    """Flag state and validation shared by the sync and async builders."""

    def __init__(self) -> None:
        self._read = False
        self._write = False
        self._append = False
        self._truncate = False
        self._create = False
        self._create_new = False

    def read(self, read: bool) -> Self:
        self._read = read
        return self

    def write(self, write: bool) -> Self:
        self._write = write
        return self

    def append(self, append: bool) -> Self:
        self._append = append
        return self

    def truncate(self, truncate: bool) -> Self:
        self._truncate = truncate
        return self

    def create(self, create: bool) -> Self:
        self._create = create
        return self

    def create_new(self, create_new: bool) -> Self:
        self._create_new = create_new
        return self

    def __repr__(self) -> str:
        enabled = [
            name
            for name in (
                "read",
                "write",
                "append",
                "truncate",
                "create",
                "create_new",
            )
            if getattr(self, f"_{name}")
        ]
        return f"{type(self).__name__}({', '.join(enabled)})"

    def _check_creation(self) -> None:
        if not self._write and not self._append:
            if self._truncate or self._create or self._create_new:
                raise _invalid_input()
        elif self._append and self._truncate and not self._create_new:
            raise _invalid_input()

    def _access_flags(self) -> int:
        if not (self._read or self._write or self._append):
            raise _invalid_input()
        if self._append:
            base = os.O_RDWR if self._read else os.O_WRONLY
            return base | os.O_APPEND
        if self._read and self._write:
            return os.O_RDWR
        if self._write:
            return os.O_WRONLY
        return os.O_RDONLY

    def _creation_flags(self) -> int:
        self._check_creation()
        if self._create_new:
            return os.O_CREAT | os.O_EXCL
        flags = 0
        if self._create:
            flags |= os.O_CREAT
        if self._truncate:
            flags |= os.O_TRUNC
        return flags

    def _flags(self) -> int:
        return (
            self._access_flags()
            | self._creation_flags()
            | NOINHERIT_FLAG
            | BINARY_FLAG
        )

    def _file_mode(self) -> str:
        # Only decides what io.FileIO allows; the real flags come from the
        # opener.
        if self._append:
            return "a+b" if self._read else "ab"
        if self._write:
            return "r+b" if self._read else "wb"
        return "rb"

    def _opener(self, path: StrPath, _flags: int) -> int:
        return self._open_fd(path)

    def _open_fd(self, path: StrPath) -> int:
        return os.open(path, self._flags())


class OpenOptions(_PlatformOpenOptionsExt, OpenOptionsBase):
    """Builder for opening a :class:`~fs_err.File` with full control.

    >>> OpenOptions().read(True).write(True).create(True).open("data.bin")
    """

    def open(self, path: StrPath) -> File:
        with wrap_errors(ErrorKind.OPEN_FILE, path):
            raw = io.FileIO(path, self._file_mode(), opener=self._opener)
        return File(raw, path)
