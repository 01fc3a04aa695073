"""Duplicate key detection for dictionary files."""

import logging
from collections import defaultdict
from dataclasses import dataclass
from pathlib import Path

from translit.ingest.loader import RecordError, parse_dictionary_record
from translit.utils.io import read_records


@dataclass
class DuplicateKey:
    """A dictionary key defined more than once in one direction."""

    direction: str
    partition: str
    key: str
    line_numbers: list[int]

    @property
    def dropped(self) -> int:
        return len(self.line_numbers) - 1


@dataclass
class DedupResult:
    """Result of a dictionary duplicate check."""

    path: Path
    total_records: int
    duplicate_count: int
    duplicate_keys: list[DuplicateKey]


def detect_duplicates(
    dictionary_path: Path,
    logger: logging.Logger,
) -> DedupResult:
    """
    Detect keys defined more than once in a dictionary file.

    Each record feeds both directions, so a repeated word on either side
    is a duplicate. The loader keeps the first entry and drops the rest.

    Args:
        dictionary_path: Path to an ``<a>-to-<b>.txt`` file
        logger: Logger instance

    Returns:
        Deduplication result
    """
    if not dictionary_path.exists():
        logger.warning(f"Dictionary file not found: {dictionary_path}")
        return DedupResult(
            path=dictionary_path,
            total_records=0,
            duplicate_count=0,
            duplicate_keys=[],
        )

    # (direction, partition, key) -> line numbers
    key_lines: dict[tuple[str, str, str], list[int]] = defaultdict(list)
    total = 0

    for line_no, line in read_records(dictionary_path):
        try:
            word_a, word_b, is_person_name = parse_dictionary_record(line)
        except RecordError:
            # Reported by the rule checks
            continue
        total += 1
        partition = "names" if is_person_name else "other"
        key_lines[("forward", partition, word_a)].append(line_no)
        key_lines[("reverse", partition, word_b)].append(line_no)

    duplicate_keys = [
        DuplicateKey(direction=direction, partition=partition, key=key, line_numbers=lines)
        for (direction, partition, key), lines in key_lines.items()
        if len(lines) > 1
    ]
    duplicate_count = sum(d.dropped for d in duplicate_keys)

    logger.info(f"Found {duplicate_count} duplicate keys in {dictionary_path.name}")

    return DedupResult(
        path=dictionary_path,
        total_records=total,
        duplicate_count=duplicate_count,
        duplicate_keys=duplicate_keys,
    )
