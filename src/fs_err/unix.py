"""Unix-specific extensions to the fs_err types and functions."""

import os
import stat
import sys
from collections.abc import Buffer
from typing import TYPE_CHECKING, Self

if sys.platform == "win32":
    raise ImportError("fs_err.unix is only available on Unix platforms")

from fs_err._sealed import Sealed
from fs_err.errors import (
    ErrorKind,
    SourceDestErrorKind,
    StrPath,
    wrap_errors,
    wrap_pair_errors,
)
from fs_err.shared.constants import DEFAULT_DIR_MODE, DEFAULT_FILE_MODE

if TYPE_CHECKING:
    from fs_err.file import File, FileRef

_ACCESS_MODE_MASK = os.O_RDONLY | os.O_WRONLY | os.O_RDWR


def symlink(src: StrPath, dst: StrPath) -> None:
    """Create a symbolic link at ``dst`` pointing to ``src``."""
    with wrap_pair_errors(SourceDestErrorKind.SYMLINK, src, dst):
        os.symlink(src, dst)


def _owner_ids(uid: int | None, gid: int | None) -> tuple[int, int]:
    # -1 leaves the corresponding id unchanged.
    return (-1 if uid is None else uid, -1 if gid is None else gid)


def chown(path: StrPath, uid: int | None, gid: int | None) -> None:
    """Change the owner and group of ``path``, following symlinks.

    ``None`` leaves that component unchanged.
    """
    with wrap_errors(ErrorKind.CHOWN, path):
        os.chown(path, *_owner_ids(uid, gid))


def lchown(path: StrPath, uid: int | None, gid: int | None) -> None:
    """Like :func:`chown`, but changes the symlink itself."""
    with wrap_errors(ErrorKind.LCHOWN, path):
        os.lchown(path, *_owner_ids(uid, gid))


def fchown(file: "File | FileRef", uid: int | None, gid: int | None) -> None:
    with wrap_errors(ErrorKind.CHOWN, file.path):
        os.fchown(file.fileno(), *_owner_ids(uid, gid))


def chroot(path: StrPath) -> None:
    with wrap_errors(ErrorKind.CHROOT, path):
        os.chroot(path)


class FileExt(Sealed):
    """Positional I/O that leaves the file cursor untouched."""

    if TYPE_CHECKING:
        path: str

        def fileno(self) -> int: ...

    def read_at(self, size: int, offset: int) -> bytes:
        with wrap_errors(ErrorKind.READ_AT, self.path):
            return os.pread(self.fileno(), size, offset)

    def write_at(self, data: Buffer, offset: int) -> int:
        with wrap_errors(ErrorKind.WRITE_AT, self.path):
            return os.pwrite(self.fileno(), data, offset)

    def read_exact_at(self, size: int, offset: int) -> bytes:
        chunks: list[bytes] = []
        remaining = size
        with wrap_errors(ErrorKind.READ_AT, self.path):
            while remaining > 0:
                chunk = os.pread(self.fileno(), remaining, offset)
                if not chunk:
                    raise OSError("failed to fill whole buffer")
                chunks.append(chunk)
                remaining -= len(chunk)
                offset += len(chunk)
        return b"".join(chunks)

    def write_all_at(self, data: Buffer, offset: int) -> None:
        view = memoryview(data).cast("B")
        with wrap_errors(ErrorKind.WRITE_AT, self.path):
            while view:
                written = os.pwrite(self.fileno(), view, offset)
                if not written:
                    raise OSError("failed to write whole buffer")
                view = view[written:]
                offset += written


class OpenOptionsExt(Sealed):
    _mode: int = DEFAULT_FILE_MODE
    _custom_flags: int = 0

    if TYPE_CHECKING:

        def _flags(self) -> int: ...

    def mode(self, mode: int) -> Self:
        """Permission bits used if the file is created (before umask)."""
        self._mode = mode
        return self

    def custom_flags(self, flags: int) -> Self:
        """Extra ``os.O_*`` flags; access-mode bits are ignored."""
        self._custom_flags = flags
        return self

    def _open_fd(self, path: StrPath) -> int:
        flags = self._flags() | (self._custom_flags & ~_ACCESS_MODE_MASK)
        return os.open(path, flags, self._mode)


class DirEntryExt(Sealed):
    _entry: os.DirEntry[str]

    def ino(self) -> int:
        return self._entry.inode()


class DirBuilderExt(Sealed):
    _mode: int = DEFAULT_DIR_MODE

    def mode(self, mode: int) -> Self:
        self._mode = mode
        return self


class FileTypeExt(Sealed):
    mode: int

    def is_block_device(self) -> bool:
        return stat.S_ISBLK(self.mode)

    def is_char_device(self) -> bool:
        return stat.S_ISCHR(self.mode)

    def is_fifo(self) -> bool:
        return stat.S_ISFIFO(self.mode)

    def is_socket(self) -> bool:
        return stat.S_ISSOCK(self.mode)


__all__ = [
    "DirBuilderExt",
    "DirEntryExt",
    "FileExt",
    "FileTypeExt",
    "OpenOptionsExt",
    "chown",
    "chroot",
    "fchown",
    "lchown",
    "symlink",
]
