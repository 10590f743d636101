"""Tests for the pattern catalog and rule selection."""

from __future__ import annotations

import pytest

from fakeai_audit.config import ExtraPatternConfig
from fakeai_audit.rules import BUILTIN_RULES, build_catalog, default_catalog, list_rule_info
from fakeai_audit.rules.base import TIER_ORDER, PatternRule, Severity


def test_severity_ordering_is_ascending() -> None:
    assert Severity.CONFORME < Severity.MINEUR < Severity.MAJEUR < Severity.CRITIQUE
    assert TIER_ORDER == (Severity.CRITIQUE, Severity.MAJEUR, Severity.MINEUR)
    assert Severity.parse(" Majeur ") is Severity.MAJEUR


def test_severity_parse_rejects_unknown_names() -> None:
    with pytest.raises(ValueError, match="Unknown severity"):
        Severity.parse("blocker")


def test_default_catalog_groups_rules_in_declaration_order() -> None:
    catalog = default_catalog()
    critical = catalog.rules_for_severity(Severity.CRITIQUE)
    major = catalog.rules_for_severity(Severity.MAJEUR)
    minor = catalog.rules_for_severity(Severity.MINEUR)

    assert critical[0].rule_id == "math_random"
    assert critical[-1].rule_id == "omniscient"
    assert [item.rule_id for item in major[:3]] == ["predict_call", "simulate_call", "analyze_call"]
    assert minor[0].rule_id == "todo_marker"
    assert len(critical) + len(major) + len(minor) == len(BUILTIN_RULES)
    assert catalog.rules_for_severity(Severity.CONFORME) == ()
    assert catalog.filename_markers == ("Quantum", "Consciousness", "Infinite")


def test_rule_ids_are_unique() -> None:
    rule_ids = [item.rule_id for item in BUILTIN_RULES]
    assert len(rule_ids) == len(set(rule_ids))


def test_case_sensitivity_is_a_per_rule_property() -> None:
    rules = {item.rule_id: item for item in BUILTIN_RULES}

    assert rules["todo_marker"].matches("// TODO later")
    assert not rules["todo_marker"].matches("// todo later")

    assert rules["not_implemented"].matches("throw new Error('NOT IMPLEMENTED')")
    assert rules["consciousness_level"].matches("this.CONSCIOUSNESS_LEVEL = 3")

    assert rules["predict_call"].matches("predictTrend(data)")
    assert not rules["predict_call"].matches("PredictTrend(data)")

    assert rules["math_random"].matches("Math.random()")
    assert not rules["math_random"].matches("math.random()")


def test_rule_describe_uses_regex_literal_notation() -> None:
    rules = {item.rule_id: item for item in BUILTIN_RULES}
    assert rules["math_random"].describe() == r"/Math\.random\(\)/"
    assert rules["fake_ai"].describe() == "/fake.*ai/i"
    assert rules["fake_ai"].violation() == "critique pattern detected: fake_ai /fake.*ai/i"


def test_pattern_rule_rejects_conforme_tier_and_bad_regex() -> None:
    with pytest.raises(ValueError, match="conforme"):
        PatternRule(rule_id="x", severity=Severity.CONFORME, pattern="x")
    with pytest.raises(ValueError, match="Invalid regex"):
        PatternRule(rule_id="broken", severity=Severity.MINEUR, pattern="(unclosed")


def test_build_catalog_applies_enable_and_disable() -> None:
    catalog = build_catalog(
        enabled_rule_ids=["math_random", "todo_marker", "ai_score"],
        disabled_rule_ids=["ai_score"],
    )
    assert catalog.rule_ids == ("math_random", "todo_marker")


def test_build_catalog_rejects_unknown_rule_ids() -> None:
    with pytest.raises(ValueError, match="Unknown rule ids: nope"):
        build_catalog(disabled_rule_ids=["nope"])


def test_extra_patterns_follow_builtin_rules_of_their_tier() -> None:
    catalog = build_catalog(
        extra_patterns=[
            ExtraPatternConfig(
                rule_id="lorem_ipsum",
                severity="mineur",
                regex=r"lorem\s*ipsum",
                ignore_case=True,
            )
        ]
    )
    minor = catalog.rules_for_severity(Severity.MINEUR)
    assert minor[-1].rule_id == "lorem_ipsum"
    assert minor[-1].matches("Lorem Ipsum dolor")
    assert catalog.rule_ids.index("lorem_ipsum") > catalog.rule_ids.index("random_confidence")


def test_extra_patterns_cannot_shadow_builtin_ids() -> None:
    with pytest.raises(ValueError, match="Duplicate rule id: todo_marker"):
        build_catalog(
            extra_patterns=[ExtraPatternConfig(rule_id="todo_marker", severity="mineur", regex="x")]
        )


def test_list_rule_info_flags_builtin_rules() -> None:
    info = list_rule_info(
        [ExtraPatternConfig(rule_id="custom", severity="majeur", regex="hype")]
    )
    by_id = {item.rule_id: item for item in info}
    assert by_id["math_random"].builtin is True
    assert by_id["math_random"].severity == "critique"
    assert by_id["custom"].builtin is False
    assert by_id["custom"].severity == "majeur"
