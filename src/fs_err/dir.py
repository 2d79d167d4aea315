import os
import stat
import sys
from collections.abc import Iterator
from dataclasses import dataclass
from types import TracebackType
from typing import Self

from fs_err.errors import ErrorKind, StrPath, wrap_errors
from fs_err.shared.constants import DEFAULT_DIR_MODE

if sys.platform == "win32":
    from fs_err.windows import DirBuilderExt as _PlatformDirBuilderExt
    from fs_err.windows import DirEntryExt as _PlatformDirEntryExt
    from fs_err.windows import FileTypeExt as _PlatformFileTypeExt
else:
    from fs_err.unix import DirBuilderExt as _PlatformDirBuilderExt
    from fs_err.unix import DirEntryExt as _PlatformDirEntryExt
    from fs_err.unix import FileTypeExt as _PlatformFileTypeExt


@dataclass(frozen=True)
class FileType(_PlatformFileTypeExt):
    """The type of a filesystem object, as reported without following links."""

    mode: int

    @classmethod
    def from_mode(cls, mode: int) -> "FileType":
        return cls(stat.S_IFMT(mode))

    def is_dir(self) -> bool:
        return stat.S_ISDIR(self.mode)

    def is_file(self) -> bool:
        return stat.S_ISREG(self.mode)

    def is_symlink(self) -> bool:
        return stat.S_ISLNK(self.mode)


def _entry_mode(entry: os.DirEntry[str]) -> int:
    # Answered from the directory listing when the platform provides it;
    # only unusual entries need an lstat.
    if entry.is_symlink():
        return stat.S_IFLNK
    if entry.is_dir(follow_symlinks=False):
        return stat.S_IFDIR
    if entry.is_file(follow_symlinks=False):
        return stat.S_IFREG
    return entry.stat(follow_symlinks=False).st_mode


class DirEntry(_PlatformDirEntryExt):
    """One child of a directory being read with :func:`read_dir`."""

    __slots__ = ("_entry",)

    def __init__(self, entry: os.DirEntry[str]) -> None:
        self._entry = entry

    @property
    def path(self) -> str:
        return self._entry.path

    @property
    def name(self) -> str:
        return self._entry.name

    def file_name(self) -> str:
        return self._entry.name

    def __fspath__(self) -> str:
        return self._entry.path

    def __repr__(self) -> str:
        return f"<DirEntry {self.name!r}>"

    def metadata(self) -> os.stat_result:
        """Metadata of the entry itself; symlinks are not followed."""
        with wrap_errors(ErrorKind.METADATA, self.path):
            return self._entry.stat(follow_symlinks=False)

    def file_type(self) -> FileType:
        with wrap_errors(ErrorKind.METADATA, self.path):
            return FileType.from_mode(_entry_mode(self._entry))

    def is_dir(self, *, follow_symlinks: bool = True) -> bool:
        with wrap_errors(ErrorKind.METADATA, self.path):
            return self._entry.is_dir(follow_symlinks=follow_symlinks)

    def is_file(self, *, follow_symlinks: bool = True) -> bool:
        with wrap_errors(ErrorKind.METADATA, self.path):
            return self._entry.is_file(follow_symlinks=follow_symlinks)

    def is_symlink(self) -> bool:
        with wrap_errors(ErrorKind.METADATA, self.path):
            return self._entry.is_symlink()


class ReadDir(Iterator[DirEntry]):
    """Lazy, forward-only iterator over the entries of one directory.

    A failure while listing is reported against the directory path and ends
    the iteration.
    """

    def __init__(self, entries: "os._ScandirIterator[str]", path: StrPath):
        self._entries = entries
        self._path: str = os.fspath(path)
        self._done = False

    @property
    def path(self) -> str:
        return self._path

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> DirEntry:
        if self._done:
            raise StopIteration
        try:
            with wrap_errors(ErrorKind.READ_DIR, self._path):
                entry = next(self._entries)
        except BaseException:
            self.close()
            raise
        return DirEntry(entry)

    def close(self) -> None:
        self._done = True
        self._entries.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<ReadDir {self._path!r}>"


def read_dir(path: StrPath) -> ReadDir:
    """Return an iterator over the entries within a directory."""
    with wrap_errors(ErrorKind.READ_DIR, path):
        entries = os.scandir(path)
    return ReadDir(entries, path)


class DirBuilder(_PlatformDirBuilderExt):
    """Creates directories with configurable options."""

    def __init__(self) -> None:
        self._recursive = False
        self._mode = DEFAULT_DIR_MODE

    def recursive(self, recursive: bool) -> Self:
        self._recursive = recursive
        return self

    def create(self, path: StrPath) -> None:
        with wrap_errors(ErrorKind.CREATE_DIR, path):
            if self._recursive:
                os.makedirs(path, self._mode, exist_ok=True)
            else:
                os.mkdir(path, self._mode)
