import sys

if sys.platform != "win32":
    raise ImportError("fs_err.aio.windows is only available on Windows")

import aiofiles.os

from fs_err.errors import SourceDestErrorKind, StrPath, wrap_pair_errors


async def symlink_dir(src: StrPath, dst: StrPath) -> None:
    with wrap_pair_errors(SourceDestErrorKind.SYMLINK_DIR, src, dst):
        await aiofiles.os.symlink(src, dst, target_is_directory=True)


async def symlink_file(src: StrPath, dst: StrPath) -> None:
    with wrap_pair_errors(SourceDestErrorKind.SYMLINK_FILE, src, dst):
        await aiofiles.os.symlink(src, dst, target_is_directory=False)


__all__ = ["symlink_dir", "symlink_file"]
