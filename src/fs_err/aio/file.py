import os
from collections.abc import Buffer
from types import TracebackType
from typing import TYPE_CHECKING, Self

import aiofiles
import aiofiles.os
from aiofiles.threadpool import wrap as wrap_sync_file
from aiofiles.threadpool.binary import AsyncFileIO

from fs_err import file as sync_file
from fs_err.errors import ErrorKind, StrPath, wrap_errors

if TYPE_CHECKING:
    from fs_err.aio.open_options import OpenOptions

_fstat = aiofiles.os.wrap(os.fstat)
_fsync = aiofiles.os.wrap(os.fsync)
_fdatasync = aiofiles.os.wrap(getattr(os, "fdatasync", os.fsync))
_chmod = aiofiles.os.wrap(os.chmod)


class File:
    """Async file handle whose errors name the operation and the path.

    The blocking calls run in the default executor via ``aiofiles``.
    """

    def __init__(self, file: AsyncFileIO, path: StrPath) -> None:
        self._file = file
        self._path: str = os.fspath(path)

    @classmethod
    async def open(cls, path: StrPath) -> "File":
        """Open a file in read-only mode."""
        with wrap_errors(ErrorKind.OPEN_FILE, path):
            raw = await aiofiles.open(path, "rb", buffering=0)
        return cls(raw, path)

    @classmethod
    async def create(cls, path: StrPath) -> "File":
        """Open a file in write-only mode, creating or truncating it."""
        with wrap_errors(ErrorKind.CREATE_FILE, path):
            raw = await aiofiles.open(path, "wb", buffering=0)
        return cls(raw, path)

    @classmethod
    async def create_new(cls, path: StrPath) -> "File":
        with wrap_errors(ErrorKind.CREATE_FILE, path):
            raw = await aiofiles.open(path, "x+b", buffering=0)
        return cls(raw, path)

    @staticmethod
    def options() -> "OpenOptions":
        from fs_err.aio.open_options import OpenOptions

        return OpenOptions()

    @classmethod
    def from_sync(cls, file: sync_file.File) -> "File":
        """Take over an open :class:`fs_err.File`; it becomes closed."""
        raw, path = file.into_parts()
        return cls(wrap_sync_file(raw), path)

    @classmethod
    def from_parts(cls, file: AsyncFileIO, path: StrPath) -> "File":
        return cls(file, path)

    def into_parts(self) -> tuple[AsyncFileIO, str]:
        return self._file, self._path

    @property
    def file(self) -> AsyncFileIO:
        return self._file

    @property
    def path(self) -> str:
        return self._path

    @property
    def closed(self) -> bool:
        return self._file.closed

    def fileno(self) -> int:
        return self._file.fileno()

    def __repr__(self) -> str:
        return f"<fs_err.aio.File path={self._path!r}>"

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    # === Streaming ===

    async def read(self, size: int = -1) -> bytes:
        with wrap_errors(ErrorKind.READ, self._path):
            return await self._file.read(size) or b""

    async def write(self, data: Buffer) -> int:
        with wrap_errors(ErrorKind.WRITE, self._path):
            return await self._file.write(data) or 0

    async def write_all(self, data: Buffer) -> None:
        view = memoryview(data).cast("B")
        with wrap_errors(ErrorKind.WRITE, self._path):
            while view:
                written = await self._file.write(view)
                if not written:
                    raise OSError("failed to write whole buffer")
                view = view[written:]

    async def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        with wrap_errors(ErrorKind.SEEK, self._path):
            return await self._file.seek(offset, whence)

    async def tell(self) -> int:
        with wrap_errors(ErrorKind.SEEK, self._path):
            return await self._file.tell()

    async def flush(self) -> None:
        with wrap_errors(ErrorKind.FLUSH, self._path):
            await self._file.flush()

    async def close(self) -> None:
        if self._file.closed:
            return
        with wrap_errors(ErrorKind.FLUSH, self._path):
            await self._file.close()

    # === Metadata and durability ===

    async def sync_all(self) -> None:
        with wrap_errors(ErrorKind.SYNC_FILE, self._path):
            await _fsync(self.fileno())

    async def sync_data(self) -> None:
        with wrap_errors(ErrorKind.SYNC_FILE, self._path):
            await _fdatasync(self.fileno())

    async def set_len(self, size: int) -> None:
        with wrap_errors(ErrorKind.SET_LEN, self._path):
            await self._file.truncate(size)

    async def metadata(self) -> os.stat_result:
        with wrap_errors(ErrorKind.METADATA, self._path):
            return await _fstat(self.fileno())

    async def set_permissions(self, mode: int) -> None:
        target: int | str = (
            self.fileno() if os.chmod in os.supports_fd else self._path
        )
        with wrap_errors(ErrorKind.SET_PERMISSIONS, self._path):
            await _chmod(target, mode)
