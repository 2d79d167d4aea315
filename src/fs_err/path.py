import os
import pathlib
from typing import TYPE_CHECKING

from fs_err import operations
from fs_err._sealed import Sealed
from fs_err.dir import ReadDir, read_dir


class PathExt(Sealed):
    """``fs_err_*`` methods for path objects.

    Each one calls the matching free function on ``self``, so errors are the
    same as those of :mod:`fs_err`.
    """

    if TYPE_CHECKING:

        def __fspath__(self) -> str: ...

    def fs_err_try_exists(self) -> bool:
        return operations.exists(self)

    def fs_err_metadata(self) -> os.stat_result:
        return operations.metadata(self)

    def fs_err_symlink_metadata(self) -> os.stat_result:
        return operations.symlink_metadata(self)

    def fs_err_canonicalize(self) -> pathlib.Path:
        return operations.canonicalize(self)

    def fs_err_read_link(self) -> pathlib.Path:
        return operations.read_link(self)

    def fs_err_read_dir(self) -> ReadDir:
        return read_dir(self)

    def fs_err_create_dir(self) -> None:
        operations.create_dir(self)

    def fs_err_create_dir_all(self) -> None:
        operations.create_dir_all(self)

    def fs_err_remove_dir(self) -> None:
        operations.remove_dir(self)

    def fs_err_remove_dir_all(self) -> None:
        operations.remove_dir_all(self)

    def fs_err_remove_file(self) -> None:
        operations.remove_file(self)

    def fs_err_set_permissions(self, mode: int) -> None:
        operations.set_permissions(self, mode)


class Path(pathlib.Path, PathExt):
    """``pathlib.Path`` with the :class:`PathExt` methods.

    >>> Path("config.yaml").fs_err_metadata()
    """
