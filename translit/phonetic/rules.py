"""Rewrite rules and the anchored pattern matcher used by the phonetic engine."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from translit.models import Gender


WILDCARD = "%"


@dataclass(frozen=True)
class Pattern:
    """
    Anchored pattern made of literal runs separated by wildcards.

    A wildcard matches any run of characters, including the empty run.
    Every other character (``.`` included) only matches itself. A pattern
    always has to match the whole remaining buffer, never a prefix of it.
    """

    source: str
    segments: tuple[str, ...] = field(init=False, repr=False, compare=False)
    min_length: int = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        segments = tuple(self.source.split(WILDCARD))
        object.__setattr__(self, "segments", segments)
        object.__setattr__(self, "min_length", sum(len(s) for s in segments))

    @property
    def has_wildcard(self) -> bool:
        return len(self.segments) > 1

    def matches(self, text: str, pos: int = 0) -> bool:
        """
        Check whether the pattern matches ``text[pos:]`` in full.

        Args:
            text: Buffer to test
            pos: Cursor position; characters before it are already consumed

        Returns:
            True if the pattern matches the remaining buffer
        """
        remaining = len(text) - pos
        if remaining < self.min_length:
            return False

        if not self.has_wildcard:
            return remaining == self.min_length and text.startswith(self.source, pos)

        head, *middle, tail = self.segments
        if not text.startswith(head, pos) or not text.endswith(tail):
            return False

        # min_length guarantees head and tail do not overlap
        cursor = pos + len(head)
        end = len(text) - len(tail)
        for segment in middle:
            found = text.find(segment, cursor, end)
            if found < 0:
                return False
            cursor = found + len(segment)
        return True


@dataclass(frozen=True)
class EncodeRule:
    """Script to phonetic rule."""

    pattern: Pattern
    length: int
    replacement: str
    gender: Gender = Gender.UNSPECIFIED

    def __post_init__(self) -> None:
        _check_length(self.length, self.pattern)

    def applies_to(self, gender: Gender) -> bool:
        """Gender-agnostic rules fire for any gender, the others only for their own."""
        return self.gender == Gender.UNSPECIFIED or self.gender == gender


@dataclass(frozen=True)
class DecodeRule:
    """
    Phonetic to script rule.

    A ``None`` replacement elides the matched phonetic segment: the sound
    has no written form in the destination script.
    """

    pattern: Pattern
    length: int
    replacement: str | None

    def __post_init__(self) -> None:
        _check_length(self.length, self.pattern)


Rule = EncodeRule | DecodeRule


def _check_length(length: int, pattern: Pattern) -> None:
    if isinstance(length, bool) or not isinstance(length, int) or length < 1:
        raise ValueError(f"Rule {pattern.source!r} must consume at least one character, got {length!r}")


class RuleTable:
    """
    Ordered, immutable sequence of rules for one direction.

    Position in the table is priority: the first matching rule wins.
    """

    __slots__ = ("_rules", "name")

    def __init__(self, rules: Iterable[Rule], name: str = ""):
        self._rules: tuple[Rule, ...] = tuple(rules)
        self.name = name

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self._rules)

    def __getitem__(self, index: int) -> Rule:
        return self._rules[index]

    def __repr__(self) -> str:
        return f"RuleTable(name={self.name!r}, rules={len(self._rules)})"

    def match(self, text: str, pos: int = 0, gender: Gender | None = None) -> Rule | None:
        """
        Find the first rule whose pattern fully matches ``text[pos:]``.

        Args:
            text: Working buffer
            pos: Read cursor into the buffer
            gender: When given, rules for another gender are skipped

        Returns:
            The matching rule, or None
        """
        for rule in self._rules:
            if gender is not None and isinstance(rule, EncodeRule) and not rule.applies_to(gender):
                continue
            if rule.pattern.matches(text, pos):
                return rule
        return None
