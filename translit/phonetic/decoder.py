"""Phonetic to script conversion."""

import logging

from translit.phonetic.encoder import BOUNDARY
from translit.phonetic.rules import RuleTable


logger = logging.getLogger(__name__)


def decode(phonetic: str, rules: RuleTable) -> str:
    """
    Render a phonetic string in the destination script.

    Args:
        phonetic: Output of ``encode``
        rules: Phonetic to script rule table

    Returns:
        Destination text with boundary markers removed
    """
    out: list[str] = []
    pos = 0

    while pos < len(phonetic):
        rule = rules.match(phonetic, pos)
        if rule is None:
            out.append(phonetic[pos])
            pos += 1
            continue

        # None is an elided sound, not a failed match
        if rule.replacement is not None:
            out.append(rule.replacement)
        pos += rule.length

    result = "".join(out).replace(BOUNDARY, "")
    logger.debug(f"decode({phonetic!r}) = {result!r}")
    return result
