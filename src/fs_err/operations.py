"""Free functions mirroring ``os``/``shutil`` with annotated failures.

Every function delegates straight to the standard library call of the same
purpose and returns its result unchanged. Only ``OSError`` is rewritten.
"""

import os
import shutil
import warnings
from pathlib import Path

from fs_err.errors import (
    ContextualError,
    ErrorKind,
    SourceDestErrorKind,
    StrPath,
    wrap_errors,
    wrap_pair_errors,
)
from fs_err.file import File


def read(path: StrPath) -> bytes:
    """Read the entire contents of a file into a bytes object."""
    with File.open(path) as file:
        return file.read_to_end()


def read_to_string(
    path: StrPath, encoding: str = "utf-8", errors: str = "strict"
) -> str:
    with File.open(path) as file:
        return file.read_to_string(encoding, errors)


def write(path: StrPath, contents: bytes | str) -> None:
    """Write ``contents`` to ``path``, creating or truncating the file.

    ``str`` contents are encoded as UTF-8.
    """
    data = contents.encode("utf-8") if isinstance(contents, str) else contents
    with File.create(path) as file:
        file.write_all(data)


# === Directories ===


def create_dir(path: StrPath) -> None:
    with wrap_errors(ErrorKind.CREATE_DIR, path):
        os.mkdir(path)


def create_dir_all(path: StrPath) -> None:
    """Create ``path`` and any missing parents; existing trees are fine."""
    with wrap_errors(ErrorKind.CREATE_DIR, path):
        os.makedirs(path, exist_ok=True)


def remove_dir(path: StrPath) -> None:
    with wrap_errors(ErrorKind.REMOVE_DIR, path):
        os.rmdir(path)


def remove_dir_all(path: StrPath) -> None:
    with wrap_errors(ErrorKind.REMOVE_DIR, path):
        shutil.rmtree(path)


def remove_file(path: StrPath) -> None:
    with wrap_errors(ErrorKind.REMOVE_FILE, path):
        os.remove(path)


# === Metadata ===


def metadata(path: StrPath) -> os.stat_result:
    """Metadata of ``path``, following symlinks."""
    with wrap_errors(ErrorKind.METADATA, path):
        return os.stat(path)


def symlink_metadata(path: StrPath) -> os.stat_result:
    """Metadata of ``path`` itself, without following symlinks."""
    with wrap_errors(ErrorKind.SYMLINK_METADATA, path):
        return os.lstat(path)


def canonicalize(path: StrPath) -> Path:
    """Absolute form of ``path`` with all symlinks resolved.

    The path must exist.
    """
    with wrap_errors(ErrorKind.CANONICALIZE, path):
        return Path(os.path.realpath(path, strict=True))


def read_link(path: StrPath) -> Path:
    with wrap_errors(ErrorKind.READ_LINK, path):
        return Path(os.readlink(path))


def set_permissions(path: StrPath, mode: int) -> None:
    with wrap_errors(ErrorKind.SET_PERMISSIONS, path):
        os.chmod(path, mode)


def exists(path: StrPath) -> bool:
    """Whether ``path`` exists, following symlinks.

    Unlike :func:`os.path.exists`, only "not found" yields ``False``; any
    other failure (permission denied, for instance) is raised.
    """
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    except OSError as e:
        raise ContextualError.build(e, ErrorKind.FILE_EXISTS, path) from e
    return True


# === Two paths ===


def copy(src: StrPath, dst: StrPath) -> int:
    """Copy contents and permission bits of ``src`` to ``dst``.

    Returns the number of bytes copied.
    """
    with wrap_pair_errors(SourceDestErrorKind.COPY, src, dst):
        shutil.copyfile(src, dst)
        shutil.copymode(src, dst)
        return os.stat(dst).st_size


def rename(src: StrPath, dst: StrPath) -> None:
    with wrap_pair_errors(SourceDestErrorKind.RENAME, src, dst):
        os.replace(src, dst)


def hard_link(src: StrPath, dst: StrPath) -> None:
    with wrap_pair_errors(SourceDestErrorKind.HARD_LINK, src, dst):
        os.link(src, dst)


def soft_link(src: StrPath, dst: StrPath) -> None:
    """Create a symbolic link at ``dst`` pointing to ``src``.

    Deprecated: use ``fs_err.unix.symlink`` or
    ``fs_err.windows.symlink_file``/``symlink_dir``.
    """
    warnings.warn(
        "soft_link is deprecated; use the platform symlink functions",
        DeprecationWarning,
        stacklevel=2,
    )
    with wrap_pair_errors(SourceDestErrorKind.SOFT_LINK, src, dst):
        os.symlink(src, dst)
