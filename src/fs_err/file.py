import io
import os
import sys
from collections.abc import Buffer
from contextlib import AbstractContextManager
from typing import TYPE_CHECKING

from fs_err.errors import ErrorKind, StrPath, wrap_errors

if sys.platform == "win32":
    from fs_err.windows import FileExt as _PlatformFileExt
else:
    from fs_err.unix import FileExt as _PlatformFileExt

if TYPE_CHECKING:
    from fs_err.open_options import OpenOptions


class _FileRecord:
    """The platform handle and the path it was opened with."""

    __slots__ = ("file", "path")

    def __init__(self, file: io.FileIO, path: StrPath) -> None:
        self.file = file
        self.path: str = os.fspath(path)


def _dup_mode(file: io.FileIO) -> str:
    if file.readable() and file.writable():
        return "r+b"
    if file.writable():
        return "wb"
    return "rb"


class _FileStream(io.RawIOBase):
    """Streaming contract shared by owning and borrowed handles."""

    def __init__(self, record: _FileRecord) -> None:
        super().__init__()
        self._record = record

    @property
    def path(self) -> str:
        """The path this handle was opened with.

        It is never updated, even if the file is later moved on disk.
        """
        return self._record.path

    @property
    def name(self) -> str:
        return self._record.path

    @property
    def mode(self) -> str:
        return self._record.file.mode

    def _wrap(self, kind: ErrorKind) -> AbstractContextManager[None]:
        return wrap_errors(kind, self._record.path)

    def __repr__(self) -> str:
        state = "closed" if self.closed else self.mode
        cls = type(self)
        return (
            f"<{cls.__module__}.{cls.__qualname__} "
            f"path={self.path!r} {state}>"
        )

    # === Capabilities ===

    def fileno(self) -> int:
        return self._record.file.fileno()

    def readable(self) -> bool:
        return self._record.file.readable()

    def writable(self) -> bool:
        return self._record.file.writable()

    def seekable(self) -> bool:
        return self._record.file.seekable()

    def isatty(self) -> bool:
        return self._record.file.isatty()

    # === Reading ===

    def read(self, size: int | None = -1) -> bytes | None:
        with self._wrap(ErrorKind.READ):
            return self._record.file.read(size)

    def readall(self) -> bytes:
        with self._wrap(ErrorKind.READ):
            return self._record.file.readall()

    def readinto(self, buffer: Buffer) -> int | None:
        with self._wrap(ErrorKind.READ):
            return self._record.file.readinto(buffer)

    def _size_hint(self) -> int:
        try:
            return os.fstat(self.fileno()).st_size + 1
        except OSError:
            return 0

    def read_to_end(self) -> bytes:
        """Read everything up to EOF.

        The first read is sized from the file length so regular files are
        usually read in one call; the size probe is best-effort only.
        """
        hint = self._size_hint()
        with self._wrap(ErrorKind.READ):
            head = self._record.file.read(hint) if hint > 0 else b""
            return (head or b"") + self._record.file.readall()

    def read_to_string(
        self, encoding: str = "utf-8", errors: str = "strict"
    ) -> str:
        return self.read_to_end().decode(encoding, errors)

    # === Writing ===

    def write(self, data: Buffer) -> int | None:
        with self._wrap(ErrorKind.WRITE):
            return self._record.file.write(data)

    def write_all(self, data: Buffer) -> None:
        view = memoryview(data).cast("B")
        with self._wrap(ErrorKind.WRITE):
            while view:
                written = self._record.file.write(view)
                if not written:
                    raise OSError("failed to write whole buffer")
                view = view[written:]

    def flush(self) -> None:
        with self._wrap(ErrorKind.FLUSH):
            self._record.file.flush()

    # === Positioning ===

    def seek(self, offset: int, whence: int = os.SEEK_SET) -> int:
        with self._wrap(ErrorKind.SEEK):
            return self._record.file.seek(offset, whence)

    def tell(self) -> int:
        with self._wrap(ErrorKind.SEEK):
            return self._record.file.tell()

    def truncate(self, size: int | None = None) -> int:
        with self._wrap(ErrorKind.SET_LEN):
            return self._record.file.truncate(size)


class File(_FileStream, _PlatformFileExt):
    """Owning file handle whose errors name the operation and the path.

    Supports the full ``io.RawIOBase`` protocol, so it can be handed to
    ``io.BufferedReader``, ``io.TextIOWrapper`` or ``json.load`` and every
    I/O failure inside them still names the file.
    """

    def __init__(self, file: io.FileIO, path: StrPath) -> None:
        super().__init__(_FileRecord(file, path))
        self._released = False

    @classmethod
    def open(cls, path: StrPath) -> "File":
        """Open a file in read-only mode."""
        with wrap_errors(ErrorKind.OPEN_FILE, path):
            raw = io.FileIO(path, "r")
        return cls(raw, path)

    @classmethod
    def create(cls, path: StrPath) -> "File":
        """Open a file in write-only mode, creating or truncating it."""
        with wrap_errors(ErrorKind.CREATE_FILE, path):
            raw = io.FileIO(path, "w")
        return cls(raw, path)

    @classmethod
    def create_new(cls, path: StrPath) -> "File":
        """Create a new file in read-write mode; fails if it already exists."""
        with wrap_errors(ErrorKind.CREATE_FILE, path):
            raw = io.FileIO(path, "x+")
        return cls(raw, path)

    @staticmethod
    def options() -> "OpenOptions":
        from fs_err.open_options import OpenOptions

        return OpenOptions()

    @classmethod
    def from_parts(cls, file: io.FileIO, path: StrPath) -> "File":
        return cls(file, path)

    def into_parts(self) -> tuple[io.FileIO, str]:
        """Give up ownership of the raw file; this handle becomes closed."""
        self._released = True
        return self._record.file, self._record.path

    @property
    def file(self) -> io.FileIO:
        """The underlying raw file. Calls made on it are not annotated."""
        return self._record.file

    @property
    def closed(self) -> bool:
        return self._released or self._record.file.closed

    def close(self) -> None:
        if self.closed:
            return
        with self._wrap(ErrorKind.FLUSH):
            self._record.file.close()

    def by_ref(self) -> "FileRef":
        return FileRef(self)

    # === Metadata and durability ===

    def sync_all(self) -> None:
        with self._wrap(ErrorKind.SYNC_FILE):
            os.fsync(self.fileno())

    def sync_data(self) -> None:
        sync = getattr(os, "fdatasync", os.fsync)
        with self._wrap(ErrorKind.SYNC_FILE):
            sync(self.fileno())

    def set_len(self, size: int) -> None:
        with self._wrap(ErrorKind.SET_LEN):
            self._record.file.truncate(size)

    def metadata(self) -> os.stat_result:
        with self._wrap(ErrorKind.METADATA):
            return os.fstat(self.fileno())

    def set_permissions(self, mode: int) -> None:
        with self._wrap(ErrorKind.SET_PERMISSIONS):
            if os.chmod in os.supports_fd:
                os.chmod(self.fileno(), mode)
            else:
                os.chmod(self._record.path, mode)

    def try_clone(self) -> "File":
        with self._wrap(ErrorKind.CLONE):
            fd = os.dup(self.fileno())
            try:
                raw = io.FileIO(fd, _dup_mode(self._record.file))
            except BaseException:
                os.close(fd)
                raise
        return type(self)(raw, self._record.path)


class FileRef(_FileStream):
    """Borrowed view of a :class:`File`.

    Streams exactly like the owner and reports the same path, but closing
    it leaves the underlying handle open.
    """

    def __init__(self, owner: File) -> None:
        super().__init__(owner._record)
        self._released = False

    @property
    def closed(self) -> bool:
        return self._released or self._record.file.closed

    def close(self) -> None:
        self._released = True
