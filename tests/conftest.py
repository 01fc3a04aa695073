"""Pytest fixtures for translit tests."""

import logging
import tempfile
from pathlib import Path
from types import MappingProxyType

import pytest

from translit.ingest.loader import RESOURCES_DIR, load_default_tables
from translit.lexicon.dictionary import DictionaryBuilder
from translit.models import Gender, Language
from translit.phonetic.rules import DecodeRule, EncodeRule, Pattern, RuleTable
from translit.translator import TranslationTables, Translator


def encode_rule(pattern: str, length: int, replacement: str, gender: Gender = Gender.UNSPECIFIED) -> EncodeRule:
    return EncodeRule(Pattern(pattern), length, replacement, gender)


def decode_rule(pattern: str, length: int, replacement: str | None) -> DecodeRule:
    return DecodeRule(Pattern(pattern), length, replacement)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def test_logger() -> logging.Logger:
    """Create a test logger."""
    logger = logging.getLogger("translit_test")
    logger.setLevel(logging.DEBUG)
    return logger


@pytest.fixture
def resources_dir() -> Path:
    """Path to the bundled tables."""
    return RESOURCES_DIR


@pytest.fixture
def schema_dir() -> Path:
    """Path to schemas directory."""
    return Path(__file__).parent.parent / "translit" / "etc" / "schemas"


@pytest.fixture
def bundled_tables(test_logger) -> TranslationTables:
    """Tables loaded from the bundled resources."""
    return load_default_tables(logger=test_logger)


@pytest.fixture
def bundled_translator(bundled_tables, test_logger) -> Translator:
    """Translator over the bundled tables."""
    return Translator(bundled_tables, test_logger)


@pytest.fixture
def toy_encode_rules() -> RuleTable:
    """Latin to phonetic rules for a two-letter alphabet."""
    return RuleTable(
        [
            encode_rule("a#", 1, ".aa", Gender.FEMALE),
            encode_rule("#a%", 2, "#a"),
            encode_rule("a%", 1, ".a"),
            encode_rule("k%", 1, "k"),
            encode_rule("m%", 1, "m"),
        ],
        name="toy-encode",
    )


@pytest.fixture
def toy_decode_rules() -> RuleTable:
    """Phonetic rules rendering into an uppercase toy script."""
    return RuleTable(
        [
            decode_rule(".aa%", 3, "A:"),
            decode_rule(".a%", 2, None),
            decode_rule(".%", 1, "_"),
            decode_rule("a%", 1, "A"),
            decode_rule("k#%", 1, "K_"),
            decode_rule("k%", 1, "K"),
            decode_rule("m%", 1, "M"),
        ],
        name="toy-decode",
    )


@pytest.fixture
def toy_tables(toy_encode_rules, toy_decode_rules) -> TranslationTables:
    """English to Sinhala tables made of the toy rules and a small dictionary."""
    builder = DictionaryBuilder()
    builder.add("kama", "name-kama", is_person_name=True)
    builder.add("kama", "word-kama", is_person_name=False)
    builder.add("mak", "word-mak", is_person_name=False)

    return TranslationTables(
        encoders=MappingProxyType({Language.ENGLISH: toy_encode_rules}),
        decoders=MappingProxyType({Language.SINHALA: toy_decode_rules}),
        dictionaries=MappingProxyType({(Language.ENGLISH, Language.SINHALA): builder.build()}),
    )


@pytest.fixture
def toy_translator(toy_tables, test_logger) -> Translator:
    """Translator over the toy tables."""
    return Translator(toy_tables, test_logger)


@pytest.fixture
def table_dir(temp_dir, resources_dir) -> Path:
    """A writable copy of the bundled tables."""
    data_dir = temp_dir / "tables"
    data_dir.mkdir()
    for path in resources_dir.glob("*.txt"):
        (data_dir / path.name).write_bytes(path.read_bytes())
    return data_dir
