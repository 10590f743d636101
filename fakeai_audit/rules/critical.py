"""Critique-tier signatures: raw randomness and inflated capability claims."""

from __future__ import annotations

from fakeai_audit.rules.base import PatternRule, Severity, rule

_TIER = Severity.CRITIQUE

CRITICAL_RULES: tuple[PatternRule, ...] = (
    rule(
        "math_random",
        _TIER,
        r"Math\.random\(\)",
        "Direct call to Math.random().",
        ignore_case=False,
    ),
    rule(
        "simulate_intelligence",
        _TIER,
        r"simulate.*intelligence",
        "Claims to simulate intelligence.",
        ignore_case=True,
    ),
    rule("fake_ai", _TIER, r"fake.*ai", "Self-described fake AI.", ignore_case=True),
    rule(
        "pretend_smart",
        _TIER,
        r"pretend.*smart",
        "Pretends to be smart.",
        ignore_case=True,
    ),
    rule(
        "mock_consciousness",
        _TIER,
        r"mock.*consciousness",
        "Mocked consciousness.",
        ignore_case=True,
    ),
    rule(
        "artificial_consciousness_enabled",
        _TIER,
        r"artificial.*consciousness.*=.*true",
        "Artificial consciousness switched on by assignment.",
        ignore_case=True,
    ),
    rule(
        "quantum_consciousness",
        _TIER,
        r"quantum.*consciousness",
        "Quantum consciousness claim.",
        ignore_case=True,
    ),
    rule(
        "neural_network_simulation",
        _TIER,
        r"neural.*network.*simulation",
        "Simulated neural network.",
        ignore_case=True,
    ),
    rule(
        "advanced_ai_capabilities",
        _TIER,
        r"advanced.*ai.*capabilities",
        "Advanced AI capabilities claim.",
        ignore_case=True,
    ),
    rule(
        "superhuman_intelligence",
        _TIER,
        r"superhuman.*intelligence",
        "Superhuman intelligence claim.",
        ignore_case=True,
    ),
    rule(
        "sentient_behavior",
        _TIER,
        r"sentient.*behavior",
        "Sentient behavior claim.",
        ignore_case=True,
    ),
    rule(
        "consciousness_level",
        _TIER,
        r"consciousness.*level",
        "Numeric consciousness level.",
        ignore_case=True,
    ),
    rule(
        "artificial_general_intelligence",
        _TIER,
        r"artificial.*general.*intelligence",
        "AGI claim.",
        ignore_case=True,
    ),
    rule(
        "superintelligence",
        _TIER,
        r"superintelligence",
        "Superintelligence claim.",
        ignore_case=True,
    ),
    rule("quantum_ai", _TIER, r"quantum.*ai", "Quantum AI claim.", ignore_case=True),
    rule(
        "predict_future",
        _TIER,
        r"predict.*future",
        "Claims to predict the future.",
        ignore_case=True,
    ),
    rule(
        "analyze_universe",
        _TIER,
        r"analyze.*universe",
        "Claims to analyze the universe.",
        ignore_case=True,
    ),
    rule(
        "infinite_wisdom",
        _TIER,
        r"infinite.*wisdom",
        "Infinite wisdom claim.",
        ignore_case=True,
    ),
    rule("omniscient", _TIER, r"omniscient", "Omniscience claim.", ignore_case=True),
)
