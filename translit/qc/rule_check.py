"""Consistency checks for loaded rule tables."""

import logging
from dataclasses import dataclass, field

from translit.ingest.loader import LoadReport
from translit.models import Gender, RejectedRecord
from translit.phonetic.rules import EncodeRule, Rule, RuleTable


@dataclass
class ShadowedRule:
    """A rule that can never fire because an earlier rule has the same pattern."""

    table: str
    index: int
    shadowed_by: int
    pattern: str


@dataclass
class RuleCheckResult:
    """Result of checking a table directory."""

    rejected: list[RejectedRecord] = field(default_factory=list)
    shadowed: list[ShadowedRule] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.rejected


def _covers(earlier: Rule, later: Rule) -> bool:
    """Whether ``earlier`` always wins over ``later``."""
    if earlier.pattern != later.pattern:
        return False
    if isinstance(earlier, EncodeRule) and isinstance(later, EncodeRule):
        return earlier.gender in (Gender.UNSPECIFIED, later.gender)
    return True


def find_shadowed_rules(table: RuleTable) -> list[ShadowedRule]:
    """
    Find rules hidden behind an earlier rule with an identical pattern.

    Matching is first-wins, so such rules are unreachable. A gender-specific
    rule does not hide a later unspecified one.

    Args:
        table: Rule table to check

    Returns:
        Shadowed rules in table order
    """
    shadowed = []
    for index, rule in enumerate(table):
        for earlier_index in range(index):
            if _covers(table[earlier_index], rule):
                shadowed.append(
                    ShadowedRule(
                        table=table.name,
                        index=index,
                        shadowed_by=earlier_index,
                        pattern=rule.pattern.source,
                    )
                )
                break
    return shadowed


def check_tables(report: LoadReport, logger: logging.Logger) -> RuleCheckResult:
    """
    Check every rule table of a load report.

    Args:
        report: Loader output
        logger: Logger instance

    Returns:
        Rejected records and shadowed rules
    """
    result = RuleCheckResult(rejected=report.rejected)

    for table in report.tables.encoders.values():
        result.shadowed.extend(find_shadowed_rules(table))
    for table in report.tables.decoders.values():
        result.shadowed.extend(find_shadowed_rules(table))

    for entry in result.shadowed:
        logger.warning(f"Rule {entry.index} in {entry.table} is shadowed by rule {entry.shadowed_by} ({entry.pattern})")

    logger.info(f"Checked {len(report.files)} table files: {len(result.rejected)} rejected records, {len(result.shadowed)} shadowed rules")
    return result
