"""Windows-specific extensions to the fs_err types and functions."""

import os
import sys
from collections.abc import Buffer
from typing import TYPE_CHECKING, Self

if sys.platform != "win32":
    raise ImportError("fs_err.windows is only available on Windows")

import _winapi
import msvcrt

from fs_err._sealed import Sealed
from fs_err.errors import (
    ErrorKind,
    SourceDestErrorKind,
    StrPath,
    wrap_errors,
    wrap_pair_errors,
)

GENERIC_READ = 0x80000000
GENERIC_WRITE = 0x40000000
FILE_GENERIC_WRITE = 0x00120116
FILE_WRITE_DATA = 0x00000002

FILE_SHARE_READ = 0x00000001
FILE_SHARE_WRITE = 0x00000002
FILE_SHARE_DELETE = 0x00000004

CREATE_NEW = 1
CREATE_ALWAYS = 2
OPEN_EXISTING = 3
OPEN_ALWAYS = 4
TRUNCATE_EXISTING = 5

SECURITY_SQOS_PRESENT = 0x00100000

ERROR_INVALID_PARAMETER = 87

DEFAULT_SHARE_MODE = FILE_SHARE_READ | FILE_SHARE_WRITE | FILE_SHARE_DELETE


def symlink_dir(src: StrPath, dst: StrPath) -> None:
    """Create a directory symbolic link at ``dst`` pointing to ``src``."""
    with wrap_pair_errors(SourceDestErrorKind.SYMLINK_DIR, src, dst):
        os.symlink(src, dst, target_is_directory=True)


def symlink_file(src: StrPath, dst: StrPath) -> None:
    """Create a file symbolic link at ``dst`` pointing to ``src``."""
    with wrap_pair_errors(SourceDestErrorKind.SYMLINK_FILE, src, dst):
        os.symlink(src, dst, target_is_directory=False)


class FileExt(Sealed):
    """Positional I/O. Unlike Unix, both calls move the file cursor."""

    if TYPE_CHECKING:
        path: str

        def fileno(self) -> int: ...

    def seek_read(self, size: int, offset: int) -> bytes:
        with wrap_errors(ErrorKind.SEEK_READ, self.path):
            fd = self.fileno()
            os.lseek(fd, offset, os.SEEK_SET)
            return os.read(fd, size)

    def seek_write(self, data: Buffer, offset: int) -> int:
        with wrap_errors(ErrorKind.SEEK_WRITE, self.path):
            fd = self.fileno()
            os.lseek(fd, offset, os.SEEK_SET)
            return os.write(fd, data)


def _invalid_parameter() -> OSError:
    return OSError(
        0, "The parameter is incorrect", None, ERROR_INVALID_PARAMETER
    )


class OpenOptionsExt(Sealed):
    """Windows ``CreateFileW`` parameters for :class:`~fs_err.OpenOptions`."""

    _access_mode: int | None = None
    _share_mode: int = DEFAULT_SHARE_MODE
    _custom_flags: int = 0
    _attributes: int = 0
    _security_qos_flags: int = 0

    if TYPE_CHECKING:
        _read: bool
        _write: bool
        _append: bool
        _truncate: bool
        _create: bool
        _create_new: bool

        def _flags(self) -> int: ...

    def access_mode(self, access: int) -> Self:
        self._access_mode = access
        return self

    def share_mode(self, share: int) -> Self:
        self._share_mode = share
        return self

    def custom_flags(self, flags: int) -> Self:
        self._custom_flags = flags
        return self

    def attributes(self, attributes: int) -> Self:
        self._attributes = attributes
        return self

    def security_qos_flags(self, flags: int) -> Self:
        self._security_qos_flags = flags
        return self

    def _needs_create_file(self) -> bool:
        return (
            self._access_mode is not None
            or self._share_mode != DEFAULT_SHARE_MODE
            or bool(self._custom_flags)
            or bool(self._attributes)
            or bool(self._security_qos_flags)
        )

    def _desired_access(self) -> int:
        if self._access_mode is not None:
            return self._access_mode
        append_access = FILE_GENERIC_WRITE & ~FILE_WRITE_DATA
        if self._append:
            return (GENERIC_READ if self._read else 0) | append_access
        access = 0
        if self._read:
            access |= GENERIC_READ
        if self._write:
            access |= GENERIC_WRITE
        if not access:
            raise _invalid_parameter()
        return access

    def _creation_disposition(self) -> int:
        if not self._write and not self._append:
            if self._truncate or self._create or self._create_new:
                raise _invalid_parameter()
        elif self._append and self._truncate and not self._create_new:
            raise _invalid_parameter()

        if self._create_new:
            return CREATE_NEW
        if self._create and self._truncate:
            return CREATE_ALWAYS
        if self._create:
            return OPEN_ALWAYS
        if self._truncate:
            return TRUNCATE_EXISTING
        return OPEN_EXISTING

    def _flags_and_attributes(self) -> int:
        flags = (
            self._custom_flags | self._attributes | self._security_qos_flags
        )
        if self._security_qos_flags:
            flags |= SECURITY_SQOS_PRESENT
        return flags

    def _crt_flags(self) -> int:
        if self._append:
            flags = os.O_APPEND | (os.O_RDWR if self._read else os.O_WRONLY)
        elif self._read and self._write:
            flags = os.O_RDWR
        elif self._write:
            flags = os.O_WRONLY
        else:
            flags = os.O_RDONLY
        return flags | os.O_BINARY | os.O_NOINHERIT

    def _open_fd(self, path: StrPath) -> int:
        if not self._needs_create_file():
            return os.open(path, self._flags())

        handle = _winapi.CreateFile(
            os.fspath(path),
            self._desired_access(),
            self._share_mode,
            _winapi.NULL,
            self._creation_disposition(),
            self._flags_and_attributes(),
            _winapi.NULL,
        )
        try:
            return msvcrt.open_osfhandle(handle, self._crt_flags())
        except BaseException:
            _winapi.CloseHandle(handle)
            raise


class DirEntryExt(Sealed):
    pass


class DirBuilderExt(Sealed):
    pass


class FileTypeExt(Sealed):
    pass


__all__ = [
    "DEFAULT_SHARE_MODE",
    "DirBuilderExt",
    "DirEntryExt",
    "FileExt",
    "FileTypeExt",
    "OpenOptionsExt",
    "symlink_dir",
    "symlink_file",
]
