"""Configuration loading for fakeai-audit."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath, PureWindowsPath
from typing import Any

CONFIG_FILENAMES = (".fakeai-audit.toml", "fakeai-audit.toml")
PYPROJECT_FILENAME = "pyproject.toml"
PYPROJECT_TOOL_KEYS = ("fakeai_audit", "fakeai-audit")
DEFAULT_OUTPUT = "final-fake-ai-stats.json"
SIDES = ("backend", "frontend")
SEVERITY_NAMES = ("mineur", "majeur", "critique")
BASELINE_COUNT_FIELDS = ("total", "conforme", "mineur", "majeur", "critique")


@dataclass(slots=True)
class ExtraPatternConfig:
    """Repository-specific detection rule."""

    rule_id: str
    severity: str
    regex: str
    ignore_case: bool = False
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.rule_id,
            "severity": self.severity,
            "regex": self.regex,
            "ignore_case": self.ignore_case,
            "description": self.description,
        }


@dataclass(slots=True)
class BucketConfig:
    """A named group of files scanned and reported together."""

    name: str
    title: str = ""
    side: str = "backend"
    paths: list[str] = field(default_factory=list)
    include: list[str] = field(default_factory=list)
    exclude: list[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.title:
            self.title = self.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "title": self.title,
            "side": self.side,
            "paths": list(self.paths),
            "include": list(self.include),
            "exclude": list(self.exclude),
        }


@dataclass(slots=True)
class BaselineConfig:
    """Previously recorded counts for a bucket that is not re-scanned."""

    name: str
    side: str
    total: int
    conforme: int = 0
    mineur: int = 0
    majeur: int = 0
    critique: int = 0
    title: str = ""
    source: str = ""
    recorded_at: str | None = None

    def __post_init__(self) -> None:
        if not self.title:
            self.title = self.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "title": self.title,
            "side": self.side,
            "total": self.total,
            "conforme": self.conforme,
            "mineur": self.mineur,
            "majeur": self.majeur,
            "critique": self.critique,
            "source": self.source,
            "recorded_at": self.recorded_at,
        }


DEFAULT_BUCKETS: tuple[BucketConfig, ...] = (
    BucketConfig(
        name="intelligence",
        title="Intelligence modules",
        side="backend",
        include=["backend/alex-modules/intelligence/*.js"],
    ),
    BucketConfig(
        name="specialized",
        title="Specialized modules",
        side="backend",
        include=["backend/alex-modules/specialized/*.js"],
    ),
    BucketConfig(
        name="backend_infra",
        title="Backend infrastructure",
        side="backend",
        include=[
            "backend/routes/*.js",
            "backend/services/*.js",
            "backend/security/*.js",
            "backend/cache/*.js",
            "backend/cluster/*.js",
            "backend/diagnostics/*.js",
            "backend/monitoring/*.js",
        ],
    ),
    BucketConfig(
        name="frontend",
        title="Frontend modules",
        side="frontend",
        include=[
            "frontend/src/components/**/*.js",
            "frontend/src/components/**/*.jsx",
            "frontend/src/services/*.js",
            "frontend/src/services/*.ts",
            "frontend/src/hooks/*.js",
        ],
    ),
)

DEFAULT_BASELINES: tuple[BaselineConfig, ...] = (
    BaselineConfig(
        name="core",
        title="Core modules",
        side="backend",
        total=11,
        conforme=10,
        mineur=1,
        source="core module audit",
    ),
    BaselineConfig(
        name="consciousness",
        title="Consciousness modules",
        side="backend",
        total=28,
        conforme=4,
        mineur=20,
        majeur=1,
        critique=3,
        source="consciousness module audit",
    ),
)


@dataclass(slots=True)
class AppConfig:
    """Runtime configuration values resolved from project files."""

    format: str = "human"
    output: str = DEFAULT_OUTPUT
    root: str = "."
    fail_above: float | None = None
    rule_enable: list[str] | None = None
    rule_disable: list[str] = field(default_factory=list)
    filename_markers: list[str] | None = None
    patterns: list[ExtraPatternConfig] = field(default_factory=list)
    buckets: list[BucketConfig] = field(default_factory=lambda: _copy_buckets(DEFAULT_BUCKETS))
    baselines: list[BaselineConfig] = field(
        default_factory=lambda: _copy_baselines(DEFAULT_BASELINES)
    )
    source: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "format": self.format,
            "output": self.output,
            "root": self.root,
            "fail_above": self.fail_above,
            "rules": {
                "enable": list(self.rule_enable) if self.rule_enable is not None else None,
                "disable": list(self.rule_disable),
            },
            "filename": {
                "markers": (
                    list(self.filename_markers) if self.filename_markers is not None else None
                ),
            },
            "patterns": [item.to_dict() for item in self.patterns],
            "buckets": [item.to_dict() for item in self.buckets],
            "baselines": [item.to_dict() for item in self.baselines],
            "source": self.source,
        }


def load_app_config(repo: Path, config_path: Path | None = None) -> AppConfig:
    """Load config from explicit path or repository-local files with precedence."""
    repo = repo.resolve()
    if config_path is not None:
        resolved = config_path if config_path.is_absolute() else (repo / config_path)
        if not resolved.exists():
            raise ValueError(f"Config file does not exist: {resolved}")
        mapping = _extract_config_mapping(_load_toml(resolved), source_path=resolved)
        return _from_mapping(mapping, source=str(resolved))

    for filename in CONFIG_FILENAMES:
        resolved = repo / filename
        if resolved.exists():
            mapping = _extract_config_mapping(_load_toml(resolved), source_path=resolved)
            return _from_mapping(mapping, source=str(resolved))

    pyproject_path = repo / PYPROJECT_FILENAME
    if pyproject_path.exists():
        mapping = _extract_config_mapping(_load_toml(pyproject_path), source_path=pyproject_path)
        if mapping:
            return _from_mapping(mapping, source=str(pyproject_path))

    return AppConfig()


def default_config_template() -> str:
    """Return a starter config template mirroring the built-in preset."""
    lines = [
        'format = "human"',
        f'output = "{DEFAULT_OUTPUT}"',
        'root = "."',
        "# fail_above = 25.0",
        "",
        "[rules]",
        "# enable = []",
        "disable = []",
        "",
        "[filename]",
        'markers = ["Quantum", "Consciousness", "Infinite"]',
        "",
        "# [[patterns]]",
        '# id = "lorem_ipsum"',
        '# severity = "mineur"',
        '# regex = "lorem\\\\s*ipsum"',
        "# ignore_case = true",
        '# description = "Filler text left in a module."',
    ]
    for bucket in DEFAULT_BUCKETS:
        lines.extend(
            [
                "",
                "[[buckets]]",
                f'name = "{bucket.name}"',
                f'title = "{bucket.title}"',
                f'side = "{bucket.side}"',
                "paths = []",
                "include = [",
                *[f'  "{pattern}",' for pattern in bucket.include],
                "]",
                "exclude = []",
            ]
        )
    for baseline in DEFAULT_BASELINES:
        lines.extend(
            [
                "",
                "[[baselines]]",
                f'name = "{baseline.name}"',
                f'title = "{baseline.title}"',
                f'side = "{baseline.side}"',
                f"total = {baseline.total}",
                f"conforme = {baseline.conforme}",
                f"mineur = {baseline.mineur}",
                f"majeur = {baseline.majeur}",
                f"critique = {baseline.critique}",
                f'source = "{baseline.source}"',
                '# recorded_at = "2025-07-01"',
            ]
        )
    lines.append("")
    return "\n".join(lines)


def _load_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as file_obj:
            loaded = tomllib.load(file_obj)
    except tomllib.TOMLDecodeError as exc:
        raise ValueError(f"Invalid TOML in {path}: {exc}") from exc
    if not isinstance(loaded, dict):
        return {}
    return loaded


def _extract_config_mapping(loaded: dict[str, Any], *, source_path: Path) -> dict[str, Any]:
    if source_path.name == PYPROJECT_FILENAME:
        section = _find_pyproject_tool_section(loaded)
        return section if section is not None else {}

    tool_section = _find_pyproject_tool_section(loaded)
    if tool_section is not None:
        return tool_section
    return loaded


def _find_pyproject_tool_section(loaded: dict[str, Any]) -> dict[str, Any] | None:
    tool = loaded.get("tool")
    if not isinstance(tool, dict):
        return None
    for key in PYPROJECT_TOOL_KEYS:
        section = tool.get(key)
        if isinstance(section, dict):
            return section
    return None


def _from_mapping(mapping: dict[str, Any], *, source: str) -> AppConfig:
    rules_mapping = _as_table(mapping.get("rules"), "rules")
    filename_mapping = _as_table(mapping.get("filename"), "filename")

    raw_format = mapping.get("format", "human")
    format_value = str(raw_format).lower()
    if format_value not in {"human", "json"}:
        format_value = "human"

    raw_fail = mapping.get("fail_above")
    fail_value = None if raw_fail is None else _as_float(raw_fail, "fail_above")

    if "buckets" in mapping:
        buckets = _parse_buckets(mapping.get("buckets"))
    else:
        buckets = _copy_buckets(DEFAULT_BUCKETS)

    if "baselines" in mapping:
        baselines = _parse_baselines(mapping.get("baselines"))
    else:
        baselines = _copy_baselines(DEFAULT_BASELINES)

    names = [item.name for item in buckets] + [item.name for item in baselines]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise ValueError(f"Duplicate bucket names: {', '.join(duplicates)}")

    return AppConfig(
        format=format_value,
        output=_as_str(mapping.get("output", DEFAULT_OUTPUT), "output"),
        root=_as_str(mapping.get("root", "."), "root"),
        fail_above=fail_value,
        rule_enable=_as_str_list_or_none(rules_mapping.get("enable")),
        rule_disable=_as_str_list(rules_mapping.get("disable")),
        filename_markers=_as_str_list_or_none(filename_mapping.get("markers")),
        patterns=_parse_patterns(mapping.get("patterns")),
        buckets=buckets,
        baselines=baselines,
        source=source,
    )


def _parse_patterns(value: Any) -> list[ExtraPatternConfig]:
    items = _as_table_list(value, "patterns")
    parsed: list[ExtraPatternConfig] = []
    for item in items:
        parsed.append(
            ExtraPatternConfig(
                rule_id=_as_str(item.get("id"), "patterns.id"),
                severity=_as_choice(item.get("severity"), set(SEVERITY_NAMES), "patterns.severity"),
                regex=_as_str(item.get("regex"), "patterns.regex"),
                ignore_case=_as_bool(item.get("ignore_case", False), "patterns.ignore_case"),
                description=_as_str(item.get("description", ""), "patterns.description"),
            )
        )
    return parsed


def _parse_buckets(value: Any) -> list[BucketConfig]:
    items = _as_table_list(value, "buckets")
    parsed: list[BucketConfig] = []
    for item in items:
        parsed.append(
            BucketConfig(
                name=_as_str(item.get("name"), "buckets.name"),
                title=_as_str(item.get("title", ""), "buckets.title"),
                side=_as_choice(item.get("side", "backend"), set(SIDES), "buckets.side"),
                paths=_as_str_list(item.get("paths")),
                include=_as_glob_list(item.get("include"), "buckets.include"),
                exclude=_as_glob_list(item.get("exclude"), "buckets.exclude"),
            )
        )
    return parsed


def _parse_baselines(value: Any) -> list[BaselineConfig]:
    items = _as_table_list(value, "baselines")
    parsed: list[BaselineConfig] = []
    for item in items:
        name = _as_str(item.get("name"), "baselines.name")
        counts = {
            key: _as_int(item.get(key, 0), f"baselines.{name}.{key}")
            for key in BASELINE_COUNT_FIELDS
        }
        recorded_at = item.get("recorded_at")
        parsed.append(
            BaselineConfig(
                name=name,
                side=_as_choice(item.get("side", "backend"), set(SIDES), "baselines.side"),
                title=_as_str(item.get("title", ""), "baselines.title"),
                source=_as_str(item.get("source", ""), "baselines.source"),
                recorded_at=None if recorded_at is None else str(recorded_at),
                **counts,
            )
        )
    return parsed


def _copy_buckets(buckets: tuple[BucketConfig, ...]) -> list[BucketConfig]:
    return [
        BucketConfig(
            name=item.name,
            title=item.title,
            side=item.side,
            paths=list(item.paths),
            include=list(item.include),
            exclude=list(item.exclude),
        )
        for item in buckets
    ]


def _copy_baselines(baselines: tuple[BaselineConfig, ...]) -> list[BaselineConfig]:
    return [BaselineConfig(**item.to_dict()) for item in baselines]


def _as_table(value: Any, field_name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{field_name} must be a table/object")
    return value


def _as_table_list(value: Any, field_name: str) -> list[dict[str, Any]]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"{field_name} must be a list of tables")
    output: list[dict[str, Any]] = []
    for item in value:
        if not isinstance(item, dict):
            raise ValueError(f"{field_name} must be a list of tables")
        output.append(item)
    return output


def _as_str_list(value: Any) -> list[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError("Expected a list of strings")
    items: list[str] = []
    for item in value:
        if not isinstance(item, str):
            raise ValueError("Expected a list of strings")
        items.append(item)
    return items


def _as_glob_list(value: Any, field_name: str) -> list[str]:
    patterns = _as_str_list(value)
    for pattern in patterns:
        if not pattern.strip():
            raise ValueError(f"{field_name} must not contain empty patterns")
        if PurePosixPath(pattern).is_absolute() or PureWindowsPath(pattern).is_absolute():
            raise ValueError(f"{field_name} patterns must be relative to the root: {pattern}")
    return patterns


def _as_str_list_or_none(value: Any) -> list[str] | None:
    if value is None:
        return None
    return _as_str_list(value)


def _as_str(value: Any, field_name: str) -> str:
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a string")
    return value


def _as_choice(raw: Any, allowed: set[str], field_name: str) -> str:
    value = str(raw).lower()
    if value not in allowed:
        choices = ", ".join(sorted(allowed))
        raise ValueError(f"{field_name} must be one of: {choices}")
    return value


def _as_int(raw: Any, field_name: str) -> int:
    if isinstance(raw, bool) or not isinstance(raw, int):
        raise ValueError(f"{field_name} must be an integer")
    if raw < 0:
        raise ValueError(f"{field_name} must be >= 0")
    return raw


def _as_bool(raw: Any, field_name: str) -> bool:
    if not isinstance(raw, bool):
        raise ValueError(f"{field_name} must be a boolean")
    return raw


def _as_float(raw: Any, field_name: str) -> float:
    if isinstance(raw, bool) or not isinstance(raw, (int, float)):
        raise ValueError(f"{field_name} must be a number")
    return float(raw)
