import sys

import aiofiles

from fs_err.aio.file import File
from fs_err.errors import ErrorKind, StrPath, wrap_errors
from fs_err.open_options import OpenOptionsBase

if sys.platform == "win32":
    from fs_err.windows import OpenOptionsExt as _PlatformOpenOptionsExt
else:
    from fs_err.unix import OpenOptionsExt as _PlatformOpenOptionsExt


class OpenOptions(_PlatformOpenOptionsExt, OpenOptionsBase):
    """Async counterpart of :class:`fs_err.OpenOptions`.

    Flags are validated the same way; only :meth:`open` awaits.
    """

    async def open(self, path: StrPath) -> File:
        with wrap_errors(ErrorKind.OPEN_FILE, path):
            raw = await aiofiles.open(
                path, self._file_mode(), buffering=0, opener=self._opener
            )
        return File(raw, path)
