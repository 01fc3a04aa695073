"""Dictionary tables consulted before the phonetic rules."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class DictionaryTable:
    """
    Word mappings for one direction of a language pair.

    ``names`` holds person names (used when a gender is given), ``other``
    holds general vocabulary (used when the gender is unspecified).
    """

    names: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    other: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def lookup(self, word: str, use_person_names: bool) -> str | None:
        """
        Look up a word.

        Args:
            word: Word to look up (case-insensitive)
            use_person_names: Consult the names map instead of the other map

        Returns:
            Mapped text, or None on a miss
        """
        mapping = self.names if use_person_names else self.other
        return mapping.get(word.lower())

    def __len__(self) -> int:
        return len(self.names) + len(self.other)


class DictionaryBuilder:
    """Accumulates entries for one direction; the first entry for a key wins."""

    def __init__(self) -> None:
        self._names: dict[str, str] = {}
        self._other: dict[str, str] = {}
        self.duplicates = 0

    def add(self, source_word: str, dest_word: str, is_person_name: bool) -> bool:
        """
        Add an entry unless the key is already present.

        Returns:
            True if the entry was added, False if it was a duplicate
        """
        target = self._names if is_person_name else self._other
        key = source_word.lower()
        if key in target:
            self.duplicates += 1
            return False
        target[key] = dest_word.lower()
        return True

    def build(self) -> DictionaryTable:
        """Freeze the accumulated entries."""
        return DictionaryTable(
            names=MappingProxyType(dict(self._names)),
            other=MappingProxyType(dict(self._other)),
        )
