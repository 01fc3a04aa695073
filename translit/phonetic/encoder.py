"""Script to phonetic conversion."""

import logging

from translit.models import Gender
from translit.phonetic.rules import RuleTable


logger = logging.getLogger(__name__)

BOUNDARY = "#"

# Vowel-glue correction
END_VOWELS = frozenset(".aeiou" + BOUNDARY)
START_VOWELS = frozenset(".aeiou")
GLUE = ".a"


def needs_glue(previous: str, chunk: str) -> bool:
    """
    Decide whether a neutral vowel must go between ``previous`` and ``chunk``.

    Args:
        previous: Output built so far (only its last character matters)
        chunk: Phonetic replacement about to be appended

    Returns:
        True if joining them would form a consonant cluster
    """
    if not previous or previous[-1] in END_VOWELS:
        return False
    return not chunk or chunk[0] not in START_VOWELS


def encode(word: str, gender: Gender, rules: RuleTable) -> str:
    """
    Convert a word into its phonetic representation.

    The word is wrapped in boundary markers and consumed left to right. At
    each step the first gender-compatible rule matching the rest of the
    buffer emits its replacement and consumes its length; when no rule
    matches, one character is copied through verbatim.

    Args:
        word: Source word (already lowercased)
        gender: Gender hint selecting gender-specific rules
        rules: Script to phonetic rule table

    Returns:
        Phonetic string, boundary markers included
    """
    text = f"{BOUNDARY}{word}{BOUNDARY}"
    out: list[str] = []
    pos = 0

    while pos < len(text):
        rule = rules.match(text, pos, gender)
        if rule is None:
            out.append(text[pos])
            pos += 1
            continue

        if out and needs_glue(out[-1], rule.replacement):
            out.append(GLUE)
        if rule.replacement:
            out.append(rule.replacement)
        pos += rule.length

    result = "".join(out)
    logger.debug(f"encode({word!r}, {gender.name}) = {result!r}")
    return result
