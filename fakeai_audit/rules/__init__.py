"""Rules package."""

from dataclasses import dataclass

from fakeai_audit.config import ExtraPatternConfig
from fakeai_audit.rules.base import TIER_ORDER, PatternRule, Severity
from fakeai_audit.rules.critical import CRITICAL_RULES
from fakeai_audit.rules.filename import DEFAULT_FILENAME_MARKERS
from fakeai_audit.rules.major import MAJOR_RULES
from fakeai_audit.rules.minor import MINOR_RULES

BUILTIN_RULES: tuple[PatternRule, ...] = CRITICAL_RULES + MAJOR_RULES + MINOR_RULES


@dataclass(frozen=True, slots=True)
class RuleInfo:
    """Rule metadata for listing and selection."""

    rule_id: str
    severity: str
    pattern: str
    ignore_case: bool
    description: str
    builtin: bool


@dataclass(frozen=True, slots=True)
class PatternCatalog:
    """Immutable, tier-grouped set of detection rules."""

    rules: tuple[PatternRule, ...]
    filename_markers: tuple[str, ...] = DEFAULT_FILENAME_MARKERS

    def rules_for_severity(self, severity: Severity) -> tuple[PatternRule, ...]:
        """Return the rules of one tier in declaration order."""
        return tuple(item for item in self.rules if item.severity is severity)

    @property
    def rule_ids(self) -> tuple[str, ...]:
        return tuple(item.rule_id for item in self.rules)


def default_catalog() -> PatternCatalog:
    """Return the built-in catalog with every rule enabled."""
    return build_catalog()


def build_catalog(
    *,
    enabled_rule_ids: list[str] | None = None,
    disabled_rule_ids: list[str] | None = None,
    extra_patterns: list[ExtraPatternConfig] | None = None,
    filename_markers: list[str] | None = None,
) -> PatternCatalog:
    """Build a catalog applying enable/disable filters and repository patterns."""
    extras = [_extra_rule(item) for item in extra_patterns or []]
    candidates = list(BUILTIN_RULES) + extras
    registry = {item.rule_id: item for item in BUILTIN_RULES}
    for item in extras:
        if item.rule_id in registry:
            raise ValueError(f"Duplicate rule id: {item.rule_id}")
        registry[item.rule_id] = item

    disabled_set = set(disabled_rule_ids or [])
    requested_ids = set(enabled_rule_ids or []) | disabled_set
    unknown = [rule_id for rule_id in requested_ids if rule_id not in registry]
    if unknown:
        joined = ", ".join(sorted(unknown))
        raise ValueError(f"Unknown rule ids: {joined}")

    enabled_set = set(enabled_rule_ids) if enabled_rule_ids is not None else None
    selected: list[PatternRule] = []
    # Grouping by tier keeps extras after the built-in rules of the same tier.
    for severity in TIER_ORDER:
        for item in candidates:
            if item.severity is not severity or item.rule_id in disabled_set:
                continue
            if enabled_set is not None and item.rule_id not in enabled_set:
                continue
            selected.append(item)

    markers = (
        tuple(filename_markers) if filename_markers is not None else DEFAULT_FILENAME_MARKERS
    )
    return PatternCatalog(rules=tuple(selected), filename_markers=markers)


def list_rule_info(extra_patterns: list[ExtraPatternConfig] | None = None) -> list[RuleInfo]:
    """Return metadata for built-in rules followed by repository patterns."""
    builtin_ids = {item.rule_id for item in BUILTIN_RULES}
    extras = [_extra_rule(item) for item in extra_patterns or []]
    return [
        RuleInfo(
            rule_id=item.rule_id,
            severity=item.severity.label,
            pattern=item.pattern,
            ignore_case=item.ignore_case,
            description=item.description,
            builtin=item.rule_id in builtin_ids,
        )
        for item in list(BUILTIN_RULES) + extras
    ]


def _extra_rule(config: ExtraPatternConfig) -> PatternRule:
    return PatternRule(
        rule_id=config.rule_id,
        severity=Severity.parse(config.severity),
        pattern=config.regex,
        ignore_case=config.ignore_case,
        description=config.description,
    )
