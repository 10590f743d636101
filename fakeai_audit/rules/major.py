"""Majeur-tier signatures: simulated calls and randomness-backed scores."""

from __future__ import annotations

from fakeai_audit.rules.base import PatternRule, Severity, rule

_TIER = Severity.MAJEUR

# The call-shaped rules target code identifiers, so they stay case-sensitive.
MAJOR_RULES: tuple[PatternRule, ...] = (
    rule(
        "predict_call",
        _TIER,
        r"predict\w*\s*\(",
        "Call to a predict* function.",
        ignore_case=False,
    ),
    rule(
        "simulate_call",
        _TIER,
        r"simulate\w*\s*\(",
        "Call to a simulate* function.",
        ignore_case=False,
    ),
    rule(
        "analyze_call",
        _TIER,
        r"analyze\w*\s*\(",
        "Call to an analyze* function.",
        ignore_case=False,
    ),
    rule(
        "random_intelligence",
        _TIER,
        r"intelligence\s*=\s*Math\.random",
        "Intelligence value assigned from randomness.",
        ignore_case=True,
    ),
    rule(
        "random_smart",
        _TIER,
        r"smart\w*\s*=\s*Math\.random",
        "Smartness value assigned from randomness.",
        ignore_case=True,
    ),
    rule("ai_score", _TIER, r"ai\s*score", "Opaque AI score field.", ignore_case=True),
    rule(
        "cognitive_level",
        _TIER,
        r"cognitive\s*level",
        "Opaque cognitive level field.",
        ignore_case=True,
    ),
    rule(
        "random_learning_rate",
        _TIER,
        r"learning\s*rate.*Math\.random",
        "Learning rate derived from randomness.",
        ignore_case=True,
    ),
    rule(
        "random_accuracy",
        _TIER,
        r"accuracy.*Math\.random",
        "Accuracy derived from randomness.",
        ignore_case=True,
    ),
    rule(
        "random_confidence",
        _TIER,
        r"confidence.*Math\.random",
        "Confidence derived from randomness.",
        ignore_case=True,
    ),
)
