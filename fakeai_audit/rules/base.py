"""Severity tiers and the pattern rule model."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import IntEnum


class Severity(IntEnum):
    """Ordered classification tiers, lowest to highest."""

    CONFORME = 0
    MINEUR = 1
    MAJEUR = 2
    CRITIQUE = 3

    @property
    def label(self) -> str:
        return self.name.lower()

    @classmethod
    def parse(cls, raw: str) -> Severity:
        """Resolve a tier from its case-insensitive name."""
        try:
            return cls[raw.strip().upper()]
        except KeyError:
            choices = ", ".join(member.label for member in cls)
            raise ValueError(f"Unknown severity '{raw}'. Expected one of: {choices}") from None


# Evaluation order for content rules. CONFORME has no rules.
TIER_ORDER = (Severity.CRITIQUE, Severity.MAJEUR, Severity.MINEUR)


@dataclass(frozen=True, slots=True)
class PatternRule:
    """A single regex signature bound to one severity tier."""

    rule_id: str
    severity: Severity
    pattern: str
    ignore_case: bool = False
    description: str = ""
    _compiled: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.severity is Severity.CONFORME:
            raise ValueError(f"Rule '{self.rule_id}' cannot target the conforme tier")
        flags = re.IGNORECASE if self.ignore_case else 0
        try:
            compiled = re.compile(self.pattern, flags)
        except re.error as exc:
            raise ValueError(f"Invalid regex for rule '{self.rule_id}': {exc}") from exc
        object.__setattr__(self, "_compiled", compiled)

    def matches(self, content: str) -> bool:
        return self._compiled.search(content) is not None

    def describe(self) -> str:
        flags = "i" if self.ignore_case else ""
        return f"/{self.pattern}/{flags}"

    def violation(self) -> str:
        return f"{self.severity.label} pattern detected: {self.rule_id} {self.describe()}"


def rule(
    rule_id: str,
    severity: Severity,
    pattern: str,
    description: str,
    *,
    ignore_case: bool,
) -> PatternRule:
    return PatternRule(
        rule_id=rule_id,
        severity=severity,
        pattern=pattern,
        ignore_case=ignore_case,
        description=description,
    )
