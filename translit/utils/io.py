"""I/O utilities with atomic writes and table file reading."""

import json
import shutil
import tempfile
from collections.abc import Callable, Iterable, Iterator
from pathlib import Path
from typing import Any


def atomic_write(
    path: Path,
    write_func: Callable[[Path], None],
) -> None:
    """
    Atomically write to a file using temp file and move.

    Args:
        path: Destination path
        write_func: Function that writes to a given path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    # Same directory keeps the move on one filesystem
    with tempfile.NamedTemporaryFile(
        mode="wb",
        dir=path.parent,
        delete=False,
        prefix=f".tmp.{path.name}.",
    ) as tmp_file:
        tmp_path = Path(tmp_file.name)

    try:
        write_func(tmp_path)
        shutil.move(str(tmp_path), str(path))
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise


def write_lines(path: Path, lines: Iterable[str]) -> int:
    """
    Write text lines atomically.

    Args:
        path: Destination path
        lines: Lines without trailing newlines

    Returns:
        Number of lines written
    """
    count = 0

    def _write(tmp_path: Path) -> None:
        nonlocal count
        with tmp_path.open("w", encoding="utf-8") as f:
            for line in lines:
                f.write(line + "\n")
                count += 1

    atomic_write(path, _write)
    return count


def read_records(path: Path) -> Iterator[tuple[int, str]]:
    """
    Read a flat table file line by line.

    Blank lines are skipped, a leading byte order mark is dropped.

    Args:
        path: Path to table file

    Yields:
        (line number, line without line terminator)
    """
    with Path(path).open("r", encoding="utf-8-sig") as f:
        for line_no, line in enumerate(f, 1):
            line = line.rstrip("\r\n")
            if line.strip():
                yield line_no, line


def write_json(path: Path, data: Any, indent: int = 2) -> None:
    """
    Write JSON file atomically.

    Args:
        path: Destination path
        data: Data to serialize
        indent: JSON indentation
    """

    def _write(tmp_path: Path) -> None:
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=indent)

    atomic_write(path, _write)


def read_json(path: Path) -> Any:
    """
    Read JSON file.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON data
    """
    with Path(path).open("r", encoding="utf-8") as f:
        return json.load(f)
