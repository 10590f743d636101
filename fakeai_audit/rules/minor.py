"""Mineur-tier signatures: incompleteness markers and stub returns."""

from __future__ import annotations

from fakeai_audit.rules.base import PatternRule, Severity, rule

_TIER = Severity.MINEUR

MINOR_RULES: tuple[PatternRule, ...] = (
    rule("todo_marker", _TIER, r"TODO", "TODO marker.", ignore_case=False),
    rule("fixme_marker", _TIER, r"FIXME", "FIXME marker.", ignore_case=False),
    rule("placeholder_marker", _TIER, r"PLACEHOLDER", "PLACEHOLDER marker.", ignore_case=False),
    rule(
        "not_implemented",
        _TIER,
        r"Not implemented",
        "Not-implemented notice.",
        ignore_case=True,
    ),
    rule("coming_soon", _TIER, r"Coming soon", "Coming-soon notice.", ignore_case=True),
    rule(
        "under_construction",
        _TIER,
        r"Under construction",
        "Under-construction notice.",
        ignore_case=True,
    ),
    rule("return_null", _TIER, r"return\s*null", "Bare return null.", ignore_case=False),
    rule(
        "return_undefined",
        _TIER,
        r"return\s*undefined",
        "Bare return undefined.",
        ignore_case=False,
    ),
    rule(
        "return_empty_object",
        _TIER,
        r"return\s*\{\}",
        "Returns an empty object literal.",
        ignore_case=False,
    ),
    rule(
        "return_empty_array",
        _TIER,
        r"return\s*\[\]",
        "Returns an empty array literal.",
        ignore_case=False,
    ),
    rule(
        "mock_logging",
        _TIER,
        r"console\.log.*mock",
        "Console output announcing mock data.",
        ignore_case=True,
    ),
    rule(
        "placeholder_logging",
        _TIER,
        r"console\.log.*placeholder",
        "Console output announcing placeholder data.",
        ignore_case=True,
    ),
)
