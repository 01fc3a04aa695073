"""Dictionary-first transliteration of words and lines."""

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import NamedTuple

from translit.lexicon.dictionary import DictionaryTable
from translit.models import Gender, Language
from translit.phonetic.decoder import decode
from translit.phonetic.encoder import encode
from translit.phonetic.rules import RuleTable


# Delimiters are kept as single-character tokens
DELIMITERS = " ,\\[]#'\"()"
_TOKEN_SPLIT = re.compile(f"([{re.escape(DELIMITERS)}])")

_EMPTY_DICTIONARY = DictionaryTable()


class UnsupportedPairError(ValueError):
    """Raised when no tables exist for a (source, destination) pair."""

    def __init__(self, source: Language, target: Language):
        self.source = source
        self.target = target
        super().__init__(f"Unsupported language pair: {source.value} -> {target.value}")


@dataclass(frozen=True)
class TranslationTables:
    """All rule and dictionary tables, built once and shared read-only."""

    encoders: Mapping[Language, RuleTable] = field(default_factory=lambda: MappingProxyType({}))
    decoders: Mapping[Language, RuleTable] = field(default_factory=lambda: MappingProxyType({}))
    dictionaries: Mapping[tuple[Language, Language], DictionaryTable] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def supports(self, source: Language, target: Language) -> bool:
        return source != target and source in self.encoders and target in self.decoders

    def pairs(self) -> list[tuple[Language, Language]]:
        """List supported (source, destination) pairs."""
        return [(s, t) for s in Language for t in Language if self.supports(s, t)]


class TableSet(NamedTuple):
    """Tables selected for one (source, destination) pair."""

    dictionary: DictionaryTable
    encode_rules: RuleTable
    decode_rules: RuleTable


def tokenize(text: str) -> list[str]:
    """
    Split text into words and single-character delimiter tokens.

    Args:
        text: Input line

    Returns:
        Tokens in order; joining them gives back ``text``
    """
    return [token for token in _TOKEN_SPLIT.split(text) if token]


class Translator:
    """
    Transliterates words and lines with a fixed set of tables.

    Instances hold no mutable state and can be shared between threads.
    """

    def __init__(self, tables: TranslationTables, logger: logging.Logger | None = None):
        self.tables = tables
        self.logger = logger or logging.getLogger(__name__)

    def resolve(self, source: Language, target: Language) -> TableSet:
        """
        Select the tables for a language pair.

        Raises:
            UnsupportedPairError: If the pair is the same language or has no tables
        """
        if not self.tables.supports(source, target):
            raise UnsupportedPairError(source, target)
        return TableSet(
            dictionary=self.tables.dictionaries.get((source, target), _EMPTY_DICTIONARY),
            encode_rules=self.tables.encoders[source],
            decode_rules=self.tables.decoders[target],
        )

    def translate_word(
        self,
        word: str,
        source: Language,
        target: Language,
        gender: Gender = Gender.UNSPECIFIED,
    ) -> str:
        """
        Transliterate a single word.

        Person names (any specified gender) are looked up in the names map,
        everything else in the other map. A dictionary hit is returned as
        is; a miss goes through the phonetic rules.

        Args:
            word: Word to transliterate
            source: Source language
            target: Destination language
            gender: Gender hint

        Returns:
            Transliterated word

        Raises:
            UnsupportedPairError: If the pair is not supported
        """
        return self._translate_word(word, gender, self.resolve(source, target))

    def translate_line(
        self,
        text: str,
        source: Language,
        target: Language,
        gender: Gender = Gender.UNSPECIFIED,
    ) -> str:
        """
        Transliterate a phrase, keeping punctuation and spacing in place.

        Single-character tokens (delimiters and one-letter words) are
        copied through unchanged.

        Raises:
            UnsupportedPairError: If the pair is not supported
        """
        table_set = self.resolve(source, target)
        self.logger.debug(f"Src : {source.value} Target : {target.value} Gender : {gender.name}")

        return "".join(
            self._translate_word(token, gender, table_set) if len(token) > 1 else token
            for token in tokenize(text)
        )

    def _translate_word(self, word: str, gender: Gender, table_set: TableSet) -> str:
        word = word.lower()

        result = table_set.dictionary.lookup(word, use_person_names=gender != Gender.UNSPECIFIED)
        if result is not None:
            return result

        self.logger.debug(f"Dictionary lookup failed for : {word}")
        phonetic = encode(word, gender, table_set.encode_rules)
        return decode(phonetic, table_set.decode_rules)
