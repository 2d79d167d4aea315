"""Integration tests for the async facade."""

import logging
import os
import sys
from pathlib import Path

import pytest

import fs_err
import fs_err.aio
from fs_err.errors import ErrorKind, SourceDestErrorKind


class TestAsyncFile:
    """Test the async file handle."""

    @pytest.mark.asyncio
    async def test_open_missing_file(self, workdir: Path) -> None:
        with pytest.raises(FileNotFoundError) as exc_info:
            await fs_err.aio.File.open("missing.txt")

        assert str(exc_info.value) == "failed to open file `missing.txt`"

    @pytest.mark.asyncio
    async def test_write_then_read(self, tmp_path: Path) -> None:
        path = tmp_path / "async.bin"

        async with await fs_err.aio.File.create(path) as file:
            await file.write_all(b"hello async")
            await file.flush()
            await file.sync_all()
            assert (await file.metadata()).st_size == 11

        async with await fs_err.aio.File.open(path) as file:
            assert await file.read(5) == b"hello"
            assert await file.tell() == 5
            await file.seek(6)
            assert await file.read() == b"async"

    @pytest.mark.asyncio
    async def test_create_new_refuses_existing(self, workdir: Path) -> None:
        (workdir / "taken").write_text("x")

        with pytest.raises(FileExistsError) as exc_info:
            await fs_err.aio.File.create_new("taken")

        assert str(exc_info.value) == "failed to create file `taken`"

    @pytest.mark.asyncio
    async def test_write_to_read_only_handle(self, workdir: Path) -> None:
        (workdir / "ro.txt").write_text("x")

        async with await fs_err.aio.File.open("ro.txt") as file:
            with pytest.raises(OSError) as exc_info:
                await file.write(b"y")

        assert str(exc_info.value) == "failed to write to file `ro.txt`"

    @pytest.mark.asyncio
    async def test_set_len_and_sync_data(self, tmp_path: Path) -> None:
        async with await fs_err.aio.File.create(tmp_path / "s.bin") as file:
            await file.set_len(64)
            await file.sync_data()
            assert (await file.metadata()).st_size == 64

    @pytest.mark.asyncio
    async def test_set_permissions(self, tmp_path: Path) -> None:
        path = tmp_path / "p.txt"
        async with await fs_err.aio.File.create(path) as file:
            await file.set_permissions(0o444)

        assert not path.stat().st_mode & 0o222

    @pytest.mark.asyncio
    async def test_from_sync_takes_ownership(self, sample_file: Path) -> None:
        sync_file = fs_err.File.open(sample_file)

        async with fs_err.aio.File.from_sync(sync_file) as file:
            assert sync_file.closed
            assert file.path == str(sample_file)
            assert await file.read(5) == b"first"

        assert file.closed

    @pytest.mark.asyncio
    async def test_options(self, tmp_path: Path) -> None:
        path = tmp_path / "opts.txt"
        path.write_bytes(b"abc")

        options = fs_err.aio.File.options().append(True)
        async with await options.open(path) as file:
            await file.write_all(b"def")

        assert path.read_bytes() == b"abcdef"

    @pytest.mark.asyncio
    async def test_options_invalid_flags(self, workdir: Path) -> None:
        with pytest.raises(OSError) as exc_info:
            await fs_err.aio.OpenOptions().read(True).create(True).open("x")

        assert str(exc_info.value) == "failed to open file `x`"


class TestAsyncReadDir:
    """Test async directory enumeration."""

    @pytest.mark.asyncio
    async def test_lists_children(self, tmp_path: Path) -> None:
        (tmp_path / "a.txt").write_text("a")
        (tmp_path / "b").mkdir()

        entries = await fs_err.aio.read_dir(tmp_path)
        found = {entry.name: entry async for entry in entries}

        assert sorted(found) == ["a.txt", "b"]
        assert (await found["b"].file_type()).is_dir()
        assert (await found["a.txt"].metadata()).st_size == 1
        assert found["a.txt"].path == str(tmp_path / "a.txt")

    @pytest.mark.asyncio
    async def test_missing_directory(self, workdir: Path) -> None:
        with pytest.raises(FileNotFoundError) as exc_info:
            await fs_err.aio.read_dir("absent")

        assert str(exc_info.value) == "failed to read directory `absent`"

    @pytest.mark.asyncio
    async def test_context_manager_closes(self, tmp_path: Path) -> None:
        (tmp_path / "a.txt").write_text("a")

        async with await fs_err.aio.read_dir(tmp_path) as entries:
            pass

        assert [entry async for entry in entries] == []

    @pytest.mark.asyncio
    async def test_entry_metadata_after_removal(self, tmp_path: Path) -> None:
        (tmp_path / "a.txt").write_text("a")
        async with await fs_err.aio.read_dir(tmp_path) as entries:
            (entry,) = [e async for e in entries]
        (tmp_path / "a.txt").unlink()

        with pytest.raises(FileNotFoundError) as exc_info:
            await entry.metadata()

        assert exc_info.value.kind is ErrorKind.METADATA
        assert exc_info.value.filename == str(tmp_path / "a.txt")


class TestAsyncDirBuilder:
    @pytest.mark.asyncio
    async def test_recursive(self, tmp_path: Path) -> None:
        builder = fs_err.aio.DirBuilder().recursive(True)

        await builder.create(tmp_path / "x" / "y")

        assert (tmp_path / "x" / "y").is_dir()

    @pytest.mark.asyncio
    async def test_missing_parent(self, workdir: Path) -> None:
        with pytest.raises(FileNotFoundError) as exc_info:
            await fs_err.aio.DirBuilder().create("x/y")

        assert str(exc_info.value) == "failed to create directory `x/y`"


class TestAsyncFunctions:
    """Test that async functions format errors like the sync ones."""

    @pytest.mark.asyncio
    async def test_read_write_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / "data.txt"

        await fs_err.aio.write(path, "über")

        assert await fs_err.aio.read(path) == "über".encode()
        assert await fs_err.aio.read_to_string(path) == "über"

    @pytest.mark.asyncio
    async def test_copy_into_missing_directory(self, workdir: Path) -> None:
        (workdir / "a.txt").write_text("hello")

        with pytest.raises(FileNotFoundError) as exc_info:
            await fs_err.aio.copy("a.txt", "b/c.txt")

        assert str(exc_info.value) == (
            "failed to copy file from a.txt to b/c.txt"
        )
        assert exc_info.value.kind is SourceDestErrorKind.COPY

    @pytest.mark.asyncio
    async def test_copy_returns_size(self, sample_file: Path) -> None:
        target = sample_file.with_name("copy.txt")

        assert await fs_err.aio.copy(sample_file, target) == 23

    @pytest.mark.asyncio
    async def test_directory_lifecycle(self, tmp_path: Path) -> None:
        root = tmp_path / "root"

        await fs_err.aio.create_dir(root)
        await fs_err.aio.create_dir_all(root / "a" / "b")
        await fs_err.aio.write(root / "a" / "f.txt", b"x")
        await fs_err.aio.remove_file(root / "a" / "f.txt")
        await fs_err.aio.remove_dir(root / "a" / "b")
        await fs_err.aio.remove_dir_all(root)

        assert not await fs_err.aio.exists(root)

    @pytest.mark.asyncio
    async def test_exists_missing_is_not_an_error(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        caplog.set_level(logging.DEBUG, logger="fs_err")

        assert await fs_err.aio.exists(tmp_path / "ghost") is False

        assert not [r for r in caplog.records if r.name == "fs_err.errors"]

    @pytest.mark.asyncio
    async def test_sync_and_async_messages_match(
        self, workdir: Path
    ) -> None:
        with pytest.raises(FileNotFoundError) as sync_exc:
            fs_err.remove_dir("ghost")
        with pytest.raises(FileNotFoundError) as async_exc:
            await fs_err.aio.remove_dir("ghost")

        assert str(sync_exc.value) == str(async_exc.value)

    @pytest.mark.asyncio
    async def test_metadata_queries(self, workdir: Path) -> None:
        (workdir / "f.txt").write_text("12345")

        assert (await fs_err.aio.metadata("f.txt")).st_size == 5
        assert (await fs_err.aio.symlink_metadata("f.txt")).st_size == 5
        assert await fs_err.aio.canonicalize("f.txt") == (
            (workdir / "f.txt").resolve()
        )

        with pytest.raises(FileNotFoundError) as exc_info:
            await fs_err.aio.symlink_metadata("ghost")
        assert str(exc_info.value) == (
            "failed to query metadata of symlink `ghost`"
        )

    @pytest.mark.asyncio
    async def test_rename_and_hard_link(self, workdir: Path) -> None:
        (workdir / "a").write_text("x")

        await fs_err.aio.rename("a", "b")
        await fs_err.aio.hard_link("b", "c")

        assert os.path.samefile("b", "c")
        with pytest.raises(FileNotFoundError) as exc_info:
            await fs_err.aio.rename("a", "d")
        assert str(exc_info.value) == "failed to rename file from a to d"

    @pytest.mark.asyncio
    async def test_set_permissions_missing(self, workdir: Path) -> None:
        with pytest.raises(FileNotFoundError) as exc_info:
            await fs_err.aio.set_permissions("ghost", 0o600)

        assert exc_info.value.kind is ErrorKind.SET_PERMISSIONS

    @pytest.mark.asyncio
    async def test_read_link_error(self, workdir: Path) -> None:
        (workdir / "plain").write_text("x")

        with pytest.raises(OSError) as exc_info:
            await fs_err.aio.read_link("plain")

        assert str(exc_info.value) == "failed to read symbolic link `plain`"


@pytest.mark.skipif(sys.platform == "win32", reason="unix only")
class TestAsyncUnix:
    @pytest.mark.asyncio
    async def test_symlink(self, workdir: Path) -> None:
        from fs_err.aio import unix

        (workdir / "target").write_text("x")
        await unix.symlink("target", "link")

        assert await fs_err.aio.read_link("link") == Path("target")
        with pytest.raises(FileExistsError) as exc_info:
            await unix.symlink("target", "link")
        assert str(exc_info.value) == (
            "failed to symlink file from target to link"
        )

    @pytest.mark.asyncio
    async def test_chown(self, sample_file: Path) -> None:
        from fs_err.aio import unix

        await unix.chown(sample_file, None, None)
        await unix.lchown(sample_file, os.getuid(), None)

        with pytest.raises(FileNotFoundError) as exc_info:
            await unix.chown(sample_file.with_name("ghost"), None, None)
        assert exc_info.value.kind is ErrorKind.CHOWN

    @pytest.mark.asyncio
    async def test_exists_raises_on_other_errors(self, workdir: Path) -> None:
        (workdir / "file").write_text("x")

        with pytest.raises(NotADirectoryError) as exc_info:
            await fs_err.aio.exists("file/child")

        assert exc_info.value.kind is ErrorKind.FILE_EXISTS
