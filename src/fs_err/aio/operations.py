"""Async free functions; see :mod:`fs_err.operations` for the semantics."""

import os
import shutil
from pathlib import Path

import aiofiles.os

from fs_err.aio.file import File
from fs_err.errors import (
    ContextualError,
    ErrorKind,
    SourceDestErrorKind,
    StrPath,
    wrap_errors,
    wrap_pair_errors,
)

# Not provided by aiofiles.os; run in the default executor the same way.
_realpath = aiofiles.os.wrap(os.path.realpath)
_chmod = aiofiles.os.wrap(os.chmod)
_copyfile = aiofiles.os.wrap(shutil.copyfile)
_copymode = aiofiles.os.wrap(shutil.copymode)
_rmtree = aiofiles.os.wrap(shutil.rmtree)


async def read(path: StrPath) -> bytes:
    async with await File.open(path) as file:
        return await file.read()


async def read_to_string(
    path: StrPath, encoding: str = "utf-8", errors: str = "strict"
) -> str:
    return (await read(path)).decode(encoding, errors)


async def write(path: StrPath, contents: bytes | str) -> None:
    data = contents.encode("utf-8") if isinstance(contents, str) else contents
    async with await File.create(path) as file:
        await file.write_all(data)


async def create_dir(path: StrPath) -> None:
    with wrap_errors(ErrorKind.CREATE_DIR, path):
        await aiofiles.os.mkdir(path)


async def create_dir_all(path: StrPath) -> None:
    with wrap_errors(ErrorKind.CREATE_DIR, path):
        await aiofiles.os.makedirs(path, exist_ok=True)


async def remove_dir(path: StrPath) -> None:
    with wrap_errors(ErrorKind.REMOVE_DIR, path):
        await aiofiles.os.rmdir(path)


async def remove_dir_all(path: StrPath) -> None:
    with wrap_errors(ErrorKind.REMOVE_DIR, path):
        await _rmtree(path)


async def remove_file(path: StrPath) -> None:
    with wrap_errors(ErrorKind.REMOVE_FILE, path):
        await aiofiles.os.remove(path)


async def metadata(path: StrPath) -> os.stat_result:
    with wrap_errors(ErrorKind.METADATA, path):
        return await aiofiles.os.stat(path)


async def symlink_metadata(path: StrPath) -> os.stat_result:
    with wrap_errors(ErrorKind.SYMLINK_METADATA, path):
        return await aiofiles.os.stat(path, follow_symlinks=False)


async def canonicalize(path: StrPath) -> Path:
    with wrap_errors(ErrorKind.CANONICALIZE, path):
        return Path(await _realpath(path, strict=True))


async def read_link(path: StrPath) -> Path:
    with wrap_errors(ErrorKind.READ_LINK, path):
        return Path(await aiofiles.os.readlink(path))


async def set_permissions(path: StrPath, mode: int) -> None:
    with wrap_errors(ErrorKind.SET_PERMISSIONS, path):
        await _chmod(path, mode)


async def exists(path: StrPath) -> bool:
    try:
        await aiofiles.os.stat(path)
    except FileNotFoundError:
        return False
    except OSError as e:
        raise ContextualError.build(e, ErrorKind.FILE_EXISTS, path) from e
    return True


async def copy(src: StrPath, dst: StrPath) -> int:
    with wrap_pair_errors(SourceDestErrorKind.COPY, src, dst):
        await _copyfile(src, dst)
        await _copymode(src, dst)
        return (await aiofiles.os.stat(dst)).st_size


async def rename(src: StrPath, dst: StrPath) -> None:
    with wrap_pair_errors(SourceDestErrorKind.RENAME, src, dst):
        await aiofiles.os.replace(src, dst)


async def hard_link(src: StrPath, dst: StrPath) -> None:
    with wrap_pair_errors(SourceDestErrorKind.HARD_LINK, src, dst):
        await aiofiles.os.link(src, dst)
