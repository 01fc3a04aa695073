"""Load flat rule and dictionary files into immutable translation tables."""

import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import TypeVar

from translit.lexicon.dictionary import DictionaryBuilder, DictionaryTable
from translit.models import Gender, Language, RejectedRecord, TableKind
from translit.phonetic.rules import WILDCARD, DecodeRule, EncodeRule, Pattern, RuleTable
from translit.translator import TranslationTables
from translit.utils.io import read_records
from translit.utils.log import log_with_context


T = TypeVar("T")

RESOURCES_DIR = Path(__file__).parent.parent / "resources"

# Decode replacement meaning "no written form"
NULL_SENTINEL = "(null)"

TRUTHY_FLAGS = {"1", "true", "yes", "y"}

ENCODE_FILES: dict[Language, str] = {
    Language.ENGLISH: "rules-en.txt",
    Language.SINHALA: "rules-si.txt",
    Language.TAMIL: "rules-ta.txt",
}

DECODE_FILES: dict[Language, str] = {
    Language.ENGLISH: "phonetic-en.txt",
    Language.SINHALA: "phonetic-si.txt",
    Language.TAMIL: "phonetic-ta.txt",
}

# Each file feeds both directions of its pair
DICTIONARY_FILES: dict[tuple[Language, Language], str] = {
    (Language.ENGLISH, Language.SINHALA): "en-to-si.txt",
    (Language.ENGLISH, Language.TAMIL): "en-to-ta.txt",
    (Language.SINHALA, Language.TAMIL): "si-to-ta.txt",
}


class RecordError(ValueError):
    """A table record that cannot be admitted."""


@dataclass
class FileReport:
    """Outcome of loading one table file."""

    path: Path
    kind: TableKind
    record_count: int
    rejected: list[RejectedRecord] = field(default_factory=list)
    duplicates: int = 0


@dataclass
class LoadReport:
    """Loaded tables plus per-file reports."""

    tables: TranslationTables
    files: list[FileReport]

    @property
    def rejected(self) -> list[RejectedRecord]:
        return [record for report in self.files for record in report.rejected]


def parse_length(value: str) -> int:
    try:
        length = int(value.strip())
    except ValueError:
        raise RecordError(f"non-numeric length {value!r}") from None
    if length < 1:
        raise RecordError(f"length must be positive, got {length}")
    return length


def parse_gender(value: str) -> Gender:
    """Parse a gender code; a blank code means unspecified."""
    value = value.strip()
    if not value:
        return Gender.UNSPECIFIED
    try:
        return Gender(int(value))
    except ValueError:
        raise RecordError(f"unknown gender code {value!r}") from None


def parse_pattern(value: str) -> Pattern:
    if not value:
        raise RecordError("empty pattern")
    return Pattern(value)


def parse_encode_record(line: str) -> EncodeRule:
    """
    Parse a script to phonetic record.

    Format: ``gender,ref,pattern,length,phonetic`` (``ref`` is ignored).
    """
    fields = line.split(",")
    if len(fields) != 5:
        raise RecordError(f"expected 5 fields, got {len(fields)}")

    gender, _ref, pattern, length, phonetic = fields
    return EncodeRule(
        pattern=parse_pattern(pattern),
        length=parse_length(length),
        replacement=phonetic.replace(WILDCARD, ""),
        gender=parse_gender(gender),
    )


def parse_decode_record(line: str) -> DecodeRule:
    """
    Parse a phonetic to script record.

    Format: ``pattern,replacement,length``; a ``(null)`` replacement elides.
    """
    fields = line.split(",")
    if len(fields) != 3:
        raise RecordError(f"expected 3 fields, got {len(fields)}")

    pattern, replacement, length = fields
    return DecodeRule(
        pattern=parse_pattern(pattern),
        length=parse_length(length),
        replacement=None if replacement == NULL_SENTINEL else replacement.replace(WILDCARD, ""),
    )


def parse_dictionary_record(line: str) -> tuple[str, str, bool]:
    """
    Parse a dictionary record.

    Format: ``word_a,word_b,flag1,flag2``; either flag marks a person name.

    Returns:
        (word_a, word_b, is_person_name), lowercased
    """
    fields = [f.strip() for f in line.lower().split(",")]
    if len(fields) != 4:
        raise RecordError(f"expected 4 fields, got {len(fields)}")

    word_a, word_b, flag1, flag2 = fields
    if not word_a or not word_b:
        raise RecordError("empty word")
    return word_a, word_b, flag1 in TRUTHY_FLAGS or flag2 in TRUTHY_FLAGS


def _load_records(
    path: Path,
    parse: Callable[[str], T],
    logger: logging.Logger,
) -> tuple[list[T], list[RejectedRecord]]:
    """Parse every record of a file, collecting the malformed ones."""
    records: list[T] = []
    rejected: list[RejectedRecord] = []

    for line_no, line in read_records(path):
        try:
            records.append(parse(line))
        except RecordError as e:
            record = RejectedRecord(path=path, line_no=line_no, line=line, reason=str(e))
            logger.warning(f"Rejected record {record}")
            rejected.append(record)

    return records, rejected


def load_encode_rules(path: Path, logger: logging.Logger) -> tuple[RuleTable, FileReport]:
    """Load a ``rules-<lang>.txt`` file."""
    rules, rejected = _load_records(path, parse_encode_record, logger)
    report = FileReport(path=path, kind=TableKind.ENCODE_RULES, record_count=len(rules), rejected=rejected)
    return RuleTable(rules, name=path.stem), report


def load_decode_rules(path: Path, logger: logging.Logger) -> tuple[RuleTable, FileReport]:
    """Load a ``phonetic-<lang>.txt`` file."""
    rules, rejected = _load_records(path, parse_decode_record, logger)
    report = FileReport(path=path, kind=TableKind.DECODE_RULES, record_count=len(rules), rejected=rejected)
    return RuleTable(rules, name=path.stem), report


def load_dictionary(path: Path, logger: logging.Logger) -> tuple[DictionaryTable, DictionaryTable, FileReport]:
    """
    Load an ``<a>-to-<b>.txt`` file.

    Returns:
        (a to b table, b to a table, report)
    """
    entries, rejected = _load_records(path, parse_dictionary_record, logger)

    forward = DictionaryBuilder()
    reverse = DictionaryBuilder()
    for word_a, word_b, is_person_name in entries:
        forward.add(word_a, word_b, is_person_name)
        reverse.add(word_b, word_a, is_person_name)

    duplicates = forward.duplicates + reverse.duplicates
    if duplicates:
        logger.debug(f"Dropped {duplicates} duplicate dictionary keys in {path.name}")

    report = FileReport(
        path=path,
        kind=TableKind.DICTIONARY,
        record_count=len(entries),
        rejected=rejected,
        duplicates=duplicates,
    )
    return forward.build(), reverse.build(), report


def read_tables(data_dir: Path, logger: logging.Logger | None = None) -> LoadReport:
    """
    Load every table file of a directory.

    Args:
        data_dir: Directory holding the rule and dictionary files
        logger: Logger instance

    Returns:
        Load report with the tables and per-file outcomes

    Raises:
        FileNotFoundError: If a table file is missing
    """
    logger = logger or logging.getLogger(__name__)
    data_dir = Path(data_dir)
    files: list[FileReport] = []

    encoders: dict[Language, RuleTable] = {}
    for language, filename in ENCODE_FILES.items():
        encoders[language], report = load_encode_rules(data_dir / filename, logger)
        files.append(report)

    decoders: dict[Language, RuleTable] = {}
    for language, filename in DECODE_FILES.items():
        decoders[language], report = load_decode_rules(data_dir / filename, logger)
        files.append(report)

    dictionaries: dict[tuple[Language, Language], DictionaryTable] = {}
    for (lang_a, lang_b), filename in DICTIONARY_FILES.items():
        forward, reverse, report = load_dictionary(data_dir / filename, logger)
        dictionaries[(lang_a, lang_b)] = forward
        dictionaries[(lang_b, lang_a)] = reverse
        files.append(report)

    tables = TranslationTables(
        encoders=MappingProxyType(encoders),
        decoders=MappingProxyType(decoders),
        dictionaries=MappingProxyType(dictionaries),
    )

    log_with_context(
        logger,
        "info",
        f"Loaded translation tables from {data_dir}",
        encode_rules={lang.value: len(table) for lang, table in encoders.items()},
        decode_rules={lang.value: len(table) for lang, table in decoders.items()},
        dictionary_entries={f"{a.value}-{b.value}": len(d) for (a, b), d in dictionaries.items()},
        rejected=sum(len(f.rejected) for f in files),
    )

    return LoadReport(tables=tables, files=files)


def load_tables(data_dir: Path, logger: logging.Logger | None = None) -> TranslationTables:
    """Load the translation tables of a directory."""
    return read_tables(data_dir, logger).tables


_load_lock = threading.Lock()
_loaded: dict[Path, TranslationTables] = {}


def load_default_tables(
    data_dir: Path | None = None,
    logger: logging.Logger | None = None,
) -> TranslationTables:
    """
    Load tables once per directory and reuse them afterwards.

    Args:
        data_dir: Table directory (default: bundled resources)
        logger: Logger instance

    Returns:
        Shared translation tables
    """
    key = Path(data_dir or RESOURCES_DIR).resolve()
    with _load_lock:
        if key not in _loaded:
            _loaded[key] = load_tables(key, logger)
        return _loaded[key]
