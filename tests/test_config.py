"""Tests for configuration loading."""

from __future__ import annotations

import tomllib
from pathlib import Path

import pytest

from fakeai_audit.config import (
    DEFAULT_OUTPUT,
    AppConfig,
    default_config_template,
    load_app_config,
)
from tests.helpers_fs import write_config, write_file


def test_defaults_apply_without_config_files(tmp_path: Path) -> None:
    config = load_app_config(tmp_path)
    assert config == AppConfig()
    assert config.source is None
    assert config.output == DEFAULT_OUTPUT
    assert [item.name for item in config.buckets] == [
        "intelligence",
        "specialized",
        "backend_infra",
        "frontend",
    ]
    assert [item.name for item in config.baselines] == ["core", "consciousness"]
    assert config.baselines[1].total == 28


def test_default_preset_is_copied_per_config(tmp_path: Path) -> None:
    first = load_app_config(tmp_path)
    first.buckets[0].paths.append("mutated.js")
    second = load_app_config(tmp_path)
    assert second.buckets[0].paths == []


def test_load_app_config_prefers_dot_file_over_pyproject(tmp_path: Path) -> None:
    write_file(
        tmp_path,
        "pyproject.toml",
        "\n".join(["[tool.fakeai_audit]", 'format = "json"', "fail_above = 80"]),
    )
    write_config(
        tmp_path,
        [
            'format = "json"',
            'output = "reports/stats.json"',
            "fail_above = 25.5",
            "baselines = []",
            "",
            "[rules]",
            'disable = ["todo_marker"]',
            "",
            "[filename]",
            'markers = ["Quantum"]',
            "",
            "[[buckets]]",
            'name = "app"',
            'side = "frontend"',
            'paths = ["src/app.js"]',
            'include = ["src/**/*.js"]',
        ],
    )

    config = load_app_config(tmp_path)
    assert config.format == "json"
    assert config.output == "reports/stats.json"
    assert config.fail_above == 25.5
    assert config.rule_enable is None
    assert config.rule_disable == ["todo_marker"]
    assert config.filename_markers == ["Quantum"]
    assert config.baselines == []
    assert len(config.buckets) == 1
    assert config.buckets[0].name == "app"
    assert config.buckets[0].title == "app"
    assert config.buckets[0].side == "frontend"
    assert config.buckets[0].paths == ["src/app.js"]
    assert config.source == str(tmp_path / ".fakeai-audit.toml")


def test_load_app_config_reads_pyproject_hyphenated_key(tmp_path: Path) -> None:
    write_file(
        tmp_path,
        "pyproject.toml",
        "\n".join(
            [
                '[tool."fakeai-audit"]',
                'output = "audit.json"',
                "",
                '[[tool."fakeai-audit".baselines]]',
                'name = "legacy"',
                'side = "frontend"',
                "total = 3",
                "conforme = 3",
                'source = "2024 review"',
                'recorded_at = "2024-11-02"',
            ]
        ),
    )

    config = load_app_config(tmp_path)
    assert config.output == "audit.json"
    assert config.source == str(tmp_path / "pyproject.toml")
    assert len(config.baselines) == 1
    baseline = config.baselines[0]
    assert (baseline.name, baseline.side, baseline.total, baseline.conforme) == (
        "legacy",
        "frontend",
        3,
        3,
    )
    assert baseline.recorded_at == "2024-11-02"
    assert [item.name for item in config.buckets][0] == "intelligence"


def test_pyproject_without_tool_section_falls_back_to_defaults(tmp_path: Path) -> None:
    write_file(tmp_path, "pyproject.toml", '[project]\nname = "demo"\n')
    assert load_app_config(tmp_path).source is None


def test_explicit_config_path_must_exist(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="Config file does not exist"):
        load_app_config(tmp_path, config_path=Path("missing.toml"))


def test_extra_patterns_are_parsed(tmp_path: Path) -> None:
    write_config(
        tmp_path,
        [
            "[[patterns]]",
            'id = "lorem_ipsum"',
            'severity = "Mineur"',
            'regex = "lorem\\\\s*ipsum"',
            "ignore_case = true",
        ],
    )
    config = load_app_config(tmp_path)
    assert len(config.patterns) == 1
    pattern = config.patterns[0]
    assert pattern.rule_id == "lorem_ipsum"
    assert pattern.severity == "mineur"
    assert pattern.regex == "lorem\\s*ipsum"
    assert pattern.ignore_case is True


@pytest.mark.parametrize(
    ("lines", "message"),
    [
        (['fail_above = "high"'], "fail_above must be a number"),
        (["[[buckets]]", 'name = "x"', 'side = "middle"'], "buckets.side must be one of"),
        (["[[buckets]]", "name = 3"], "buckets.name must be a string"),
        (["[[baselines]]", 'name = "x"', "total = -1"], "baselines.x.total must be >= 0"),
        (["[[patterns]]", 'id = "p"', 'severity = "fatal"', 'regex = "x"'], "patterns.severity"),
        (["rules = 5"], "rules must be a table/object"),
        (
            ["[[buckets]]", 'name = "x"', 'include = ["/srv/app/src/*.js"]'],
            "buckets.include patterns must be relative to the root",
        ),
        (
            ["[[buckets]]", 'name = "x"', "include = ['C:\\src\\*.js']"],
            "buckets.include patterns must be relative to the root",
        ),
        (["[[buckets]]", 'name = "x"', 'exclude = [" "]'], "buckets.exclude must not contain"),
        (
            ["[[buckets]]", 'name = "core"', "[[baselines]]", 'name = "core"', "total = 0"],
            "Duplicate bucket names: core",
        ),
    ],
)
def test_invalid_values_raise_value_error(tmp_path: Path, lines: list[str], message: str) -> None:
    write_config(tmp_path, lines)
    with pytest.raises(ValueError, match=message):
        load_app_config(tmp_path)


def test_invalid_toml_is_reported(tmp_path: Path) -> None:
    write_file(tmp_path, ".fakeai-audit.toml", "format = \n")
    with pytest.raises(ValueError, match="Invalid TOML"):
        load_app_config(tmp_path)


def test_default_config_template_round_trips_to_defaults(tmp_path: Path) -> None:
    template = default_config_template()
    tomllib.loads(template)
    write_file(tmp_path, ".fakeai-audit.toml", template)

    config = load_app_config(tmp_path)
    defaults = AppConfig()
    assert [item.to_dict() for item in config.buckets] == [
        item.to_dict() for item in defaults.buckets
    ]
    assert [item.to_dict() for item in config.baselines] == [
        item.to_dict() for item in defaults.baselines
    ]
    assert config.filename_markers == ["Quantum", "Consciousness", "Infinite"]
