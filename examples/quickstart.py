#!/usr/bin/env python3
"""
fs_err - Quickstart Example

Shows the error messages fs_err produces next to the ones from the
standard library, for the same failing calls.
"""

import asyncio
import tempfile
from pathlib import Path

import fs_err
import fs_err.aio


def compare_open(missing: Path) -> None:
    """Open a file that does not exist, with and without fs_err."""
    try:
        open(missing, "rb")
    except FileNotFoundError as e:
        print(f"builtin open: {e}")

    try:
        fs_err.File.open(missing)
    except FileNotFoundError as e:
        # Still a FileNotFoundError, so existing handlers keep working.
        print(f"fs_err:       {e}")
        print(f"  caused by:  {e.__cause__}")


def copy_into_missing_dir(workdir: Path) -> None:
    source = workdir / "a.txt"
    fs_err.write(source, "hello\n")

    try:
        fs_err.copy(source, workdir / "b" / "c.txt")
    except OSError as e:
        print(f"\ncopy: {e}")
        print(f"  kind: {e.kind.name}, errno: {e.errno}")


def walk(workdir: Path) -> None:
    fs_err.create_dir_all(workdir / "nested" / "tree")
    print("\nentries:")
    with fs_err.read_dir(workdir) as entries:
        for entry in entries:
            kind = "dir " if entry.is_dir() else "file"
            print(f"  {kind} {entry.name}")


async def read_async(workdir: Path) -> None:
    data = await fs_err.aio.read(workdir / "a.txt")
    print(f"\nasync read: {data!r}")

    try:
        await fs_err.aio.remove_file(workdir / "gone.txt")
    except FileNotFoundError as e:
        print(f"async remove: {e}")


def main() -> None:
    with tempfile.TemporaryDirectory() as tmp:
        workdir = Path(tmp)
        compare_open(workdir / "missing.txt")
        copy_into_missing_dir(workdir)
        walk(workdir)
        asyncio.run(read_async(workdir))

    # Opt-in: append the original error text to every message.
    fs_err.configure(inline_cause=True)
    try:
        fs_err.metadata("does/not/exist")
    except OSError as e:
        print(f"\nwith inline_cause:\n{e}")


if __name__ == "__main__":
    main()
