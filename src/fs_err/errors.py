"""Contextual filesystem errors.

A failed platform call is re-raised as an ``OSError`` of the same subclass and
errno, whose message names the attempted operation and the path(s) involved::

    >>> fs_err.File.open("missing.txt")
    Traceback (most recent call last):
    ...
    FileNotFoundError: failed to open file `missing.txt`

The original error stays reachable through ``__cause__`` and through
``err.payload.cause``.
"""

import enum
import functools
import os
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any, TypeAlias

from fs_err.shared.constants import CAUSE_INDENT
from fs_err.shared.errors import ConfigurationError, FsErrError
from fs_err.shared.logging import get_contextual_logger
from fs_err.shared.settings import Settings, get_settings

logger = get_contextual_logger("fs_err.errors")

StrPath: TypeAlias = str | os.PathLike[str]


class ErrorKind(enum.Enum):
    """Single-path operations. The value is the message's verb phrase."""

    OPEN_FILE = "open file"
    CREATE_FILE = "create file"
    CREATE_DIR = "create directory"
    SYNC_FILE = "sync file"
    SET_LEN = "set length of file"
    METADATA = "query metadata of file"
    CLONE = "clone handle for file"
    SET_PERMISSIONS = "set permissions for file"
    READ = "read from file"
    SEEK = "seek in file"
    WRITE = "write to file"
    FLUSH = "flush file"
    READ_DIR = "read directory"
    REMOVE_FILE = "remove file"
    REMOVE_DIR = "remove directory"
    CANONICALIZE = "canonicalize path"
    READ_LINK = "read symbolic link"
    SYMLINK_METADATA = "query metadata of symlink"
    FILE_EXISTS = "check file existence"

    if sys.platform == "win32":
        SEEK_READ = "seek and read from"
        SEEK_WRITE = "seek and write to"
    else:
        READ_AT = "read with offset from"
        WRITE_AT = "write with offset to"
        CHOWN = "change ownership of"
        LCHOWN = "change symlink ownership of"
        CHROOT = "change root directory to"


class SourceDestErrorKind(enum.Enum):
    """Operations involving a source and a destination path."""

    COPY = "copy file"
    HARD_LINK = "hardlink file"
    RENAME = "rename file"
    SOFT_LINK = "softlink file"

    if sys.platform == "win32":
        SYMLINK_DIR = "symlink dir"
        SYMLINK_FILE = "symlink file"
    else:
        SYMLINK = "symlink file"


def _active_settings() -> Settings:
    """Current settings, or the defaults when they cannot be loaded.

    Wrapping an error must not fail, so a broken configuration is reported
    as a warning instead of replacing the filesystem error.
    """
    try:
        return get_settings()
    except ConfigurationError as e:
        logger.warning(
            "Ignoring invalid fs_err settings: %s", e, source=e.source
        )
        return Settings()


def _cause_suffix(cause: BaseException, inline_cause: bool) -> str:
    if not inline_cause:
        return ""
    detail = getattr(cause, "strerror", None) or str(cause)
    return f"\n{CAUSE_INDENT}caused by: {detail}"


class ContextualError:
    """An ``OSError`` paired with the operation and path it happened on.

    Whether the message carries the cause's text is fixed when the payload
    is created.
    """

    __slots__ = ("cause", "inline_cause", "kind", "path")

    def __init__(
        self,
        kind: ErrorKind,
        cause: OSError,
        path: StrPath,
        inline_cause: bool | None = None,
    ) -> None:
        self.kind = kind
        self.cause = cause
        self.path: str = os.fspath(path)
        if inline_cause is None:
            inline_cause = _active_settings().inline_cause
        self.inline_cause = inline_cause

    def __str__(self) -> str:
        message = f"failed to {self.kind.value} `{self.path}`"
        return message + _cause_suffix(self.cause, self.inline_cause)

    def __repr__(self) -> str:
        return (
            f"ContextualError(kind={self.kind.name}, path={self.path!r}, "
            f"cause={self.cause!r})"
        )

    @classmethod
    def build(
        cls, cause: OSError, kind: ErrorKind, path: StrPath
    ) -> "FsError":
        return cls(kind, cause, path).into_error()

    def into_error(self) -> "FsError":
        return _raise_type(type(self.cause))._from_payload(self)


class DualPathError:
    """Like :class:`ContextualError`, for operations with two paths."""

    __slots__ = ("cause", "from_path", "inline_cause", "kind", "to_path")

    def __init__(
        self,
        kind: SourceDestErrorKind,
        cause: OSError,
        from_path: StrPath,
        to_path: StrPath,
        inline_cause: bool | None = None,
    ) -> None:
        self.kind = kind
        self.cause = cause
        self.from_path: str = os.fspath(from_path)
        self.to_path: str = os.fspath(to_path)
        if inline_cause is None:
            inline_cause = _active_settings().inline_cause
        self.inline_cause = inline_cause

    @property
    def path(self) -> str:
        return self.from_path

    def __str__(self) -> str:
        message = (
            f"failed to {self.kind.value} from {self.from_path} "
            f"to {self.to_path}"
        )
        return message + _cause_suffix(self.cause, self.inline_cause)

    def __repr__(self) -> str:
        return (
            f"DualPathError(kind={self.kind.name}, "
            f"from_path={self.from_path!r}, to_path={self.to_path!r}, "
            f"cause={self.cause!r})"
        )

    @classmethod
    def build(
        cls,
        cause: OSError,
        kind: SourceDestErrorKind,
        from_path: StrPath,
        to_path: StrPath,
    ) -> "FsError":
        return cls(kind, cause, from_path, to_path).into_error()

    def into_error(self) -> "FsError":
        return _raise_type(type(self.cause))._from_payload(self)


Payload: TypeAlias = ContextualError | DualPathError


class FsError(OSError):
    """``OSError`` raised by fs_err.

    Concrete instances also inherit from the original error's class, so
    ``except FileNotFoundError`` keeps catching them.
    """

    payload: Payload

    @classmethod
    def _from_payload(cls, payload: Payload) -> "FsError":
        cause = payload.cause
        err = cls(cause.errno, cause.strerror)
        err.payload = payload
        if isinstance(payload, DualPathError):
            err.filename = payload.from_path
            err.filename2 = payload.to_path
        else:
            err.filename = payload.path
        winerror = getattr(cause, "winerror", None)
        if winerror is not None:
            err.winerror = winerror
        err.__cause__ = cause

        if _active_settings().log_failures:
            logger.bind(
                operation=payload.kind.name, path=payload.path
            ).debug("%s", payload, errno=cause.errno)
        return err

    @property
    def kind(self) -> ErrorKind | SourceDestErrorKind:
        return self.payload.kind

    @property
    def path(self) -> str:
        return self.payload.path

    def __str__(self) -> str:
        return str(self.payload)

    def __reduce__(self) -> tuple[Any, ...]:
        return (_rebuild, (self.payload,))


def _rebuild(payload: Payload) -> FsError:
    return payload.into_error()


@functools.cache
def _raise_type(base: type[OSError]) -> type[FsError]:
    if issubclass(base, FsError):
        return base
    if base is OSError:
        return FsError
    return type(
        base.__name__,
        (FsError, base),
        {"__module__": __name__, "__qualname__": base.__qualname__},
    )


def get_payload(err: BaseException) -> Payload | None:
    if isinstance(err, FsError):
        return err.payload
    return None


@contextmanager
def wrap_errors(kind: ErrorKind, path: StrPath) -> Iterator[None]:
    try:
        yield
    except FsError:
        raise
    except OSError as e:
        raise ContextualError.build(e, kind, path) from e


@contextmanager
def wrap_pair_errors(
    kind: SourceDestErrorKind, from_path: StrPath, to_path: StrPath
) -> Iterator[None]:
    try:
        yield
    except FsError:
        raise
    except OSError as e:
        raise DualPathError.build(e, kind, from_path, to_path) from e


__all__ = [
    "ConfigurationError",
    "ContextualError",
    "DualPathError",
    "ErrorKind",
    "FsErrError",
    "FsError",
    "SourceDestErrorKind",
    "StrPath",
    "get_payload",
    "wrap_errors",
    "wrap_pair_errors",
]
