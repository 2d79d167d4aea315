import sys
from typing import Self

import aiofiles.os

from fs_err.errors import ErrorKind, StrPath, wrap_errors
from fs_err.shared.constants import DEFAULT_DIR_MODE

if sys.platform == "win32":
    from fs_err.windows import DirBuilderExt as _PlatformDirBuilderExt
else:
    from fs_err.unix import DirBuilderExt as _PlatformDirBuilderExt


class DirBuilder(_PlatformDirBuilderExt):
    def __init__(self) -> None:
        self._recursive = False
        self._mode = DEFAULT_DIR_MODE

    def recursive(self, recursive: bool) -> Self:
        self._recursive = recursive
        return self

    async def create(self, path: StrPath) -> None:
        with wrap_errors(ErrorKind.CREATE_DIR, path):
            if self._recursive:
                await aiofiles.os.makedirs(path, self._mode, exist_ok=True)
            else:
                await aiofiles.os.mkdir(path, self._mode)
