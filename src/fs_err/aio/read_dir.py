import os
import sys
from collections.abc import AsyncIterator
from types import TracebackType
from typing import Self

import aiofiles.os

from fs_err.dir import FileType, _entry_mode
from fs_err.errors import ErrorKind, StrPath, wrap_errors

if sys.platform == "win32":
    from fs_err.windows import DirEntryExt as _PlatformDirEntryExt
else:
    from fs_err.unix import DirEntryExt as _PlatformDirEntryExt

# next(it, None) so the end of the listing never surfaces as StopIteration
# inside a future.
_next_entry = aiofiles.os.wrap(next)
_entry_stat = aiofiles.os.wrap(os.DirEntry.stat)
_file_type = aiofiles.os.wrap(_entry_mode)


class DirEntry(_PlatformDirEntryExt):
    """One child of a directory being read with :func:`read_dir`."""

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
        return f"<fs_err.aio.DirEntry {self.name!r}>"

    async def metadata(self) -> os.stat_result:
        with wrap_errors(ErrorKind.METADATA, self.path):
            return await _entry_stat(self._entry, follow_symlinks=False)

    async def file_type(self) -> FileType:
        with wrap_errors(ErrorKind.METADATA, self.path):
            return FileType.from_mode(await _file_type(self._entry))


class ReadDir(AsyncIterator[DirEntry]):
    """Async iterator over the entries of one directory.

    Each entry is fetched in the executor. Iteration stops at the end of the
    listing or right after the first failure.
    """

    def __init__(self, entries: "os._ScandirIterator[str]", path: StrPath):
        self._entries = entries
        self._path: str = os.fspath(path)
        self._done = False

    @property
    def path(self) -> str:
        return self._path

    def __aiter__(self) -> Self:
        return self

    async def __anext__(self) -> DirEntry:
        if self._done:
            raise StopAsyncIteration
        try:
            with wrap_errors(ErrorKind.READ_DIR, self._path):
                entry = await _next_entry(self._entries, None)
        except BaseException:
            self.close()
            raise
        if entry is None:
            self.close()
            raise StopAsyncIteration
        return DirEntry(entry)

    def close(self) -> None:
        self._done = True
        self._entries.close()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()


async def read_dir(path: StrPath) -> ReadDir:
    with wrap_errors(ErrorKind.READ_DIR, path):
        entries = await aiofiles.os.scandir(path)
    return ReadDir(entries, path)
