import os
import sys

if sys.platform == "win32":
    raise ImportError("fs_err.aio.unix is only available on Unix platforms")

import aiofiles.os

from fs_err.errors import (
    ErrorKind,
    SourceDestErrorKind,
    StrPath,
    wrap_errors,
    wrap_pair_errors,
)
from fs_err.unix import _owner_ids

_chown = aiofiles.os.wrap(os.chown)
_lchown = aiofiles.os.wrap(os.lchown)


async def symlink(src: StrPath, dst: StrPath) -> None:
    with wrap_pair_errors(SourceDestErrorKind.SYMLINK, src, dst):
        await aiofiles.os.symlink(src, dst)


async def chown(path: StrPath, uid: int | None, gid: int | None) -> None:
    with wrap_errors(ErrorKind.CHOWN, path):
        await _chown(path, *_owner_ids(uid, gid))


async def lchown(path: StrPath, uid: int | None, gid: int | None) -> None:
    with wrap_errors(ErrorKind.LCHOWN, path):
        await _lchown(path, *_owner_ids(uid, gid))


__all__ = ["chown", "lchown", "symlink"]
