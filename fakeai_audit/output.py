"""Output rendering."""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import click

from fakeai_audit import __version__
from fakeai_audit.aggregate import BucketResult, BucketStats
from fakeai_audit.classifier import FileAnalysis
from fakeai_audit.report import BaselineStats, Report, percent
from fakeai_audit.rules.base import Severity

_SEVERITY_COLORS = {
    Severity.CONFORME: "green",
    Severity.MINEUR: "yellow",
    Severity.MAJEUR: "magenta",
    Severity.CRITIQUE: "red",
}


class ReportWriteError(RuntimeError):
    """Raised when the JSON report cannot be persisted."""


def render_human(report: Report, *, critical_limit: int = 5) -> str:
    """Render the multi-section console report."""
    projet = report.projet
    lines: list[str] = [
        click.style("Fake AI audit - whole project", bold=True),
        f"- Total modules: {projet.total}",
        click.style(
            f"- Conforme: {projet.conforme} ({projet.pourcentage_conformes:.1f}%)",
            fg="green",
        ),
        click.style(
            f"- Fake AI detected: {projet.violations} ({projet.pourcentage_fake_ai:.1f}%)",
            fg="red",
        ),
        click.style(f"Global fake AI percentage: {projet.pourcentage_fake_ai:.1f}%", bold=True),
        "",
    ]
    lines.extend(_side_section("Backend", report.backend))
    lines.append("")
    lines.extend(_side_section("Frontend", report.frontend))
    lines.append("")

    lines.append(click.style("Per-bucket detail:", bold=True))
    for bucket in report.buckets:
        lines.extend(_bucket_section(bucket, critical_limit=critical_limit))
    for baseline in report.baselines:
        lines.extend(_baseline_section(baseline))

    if report.warnings:
        lines.append("")
        lines.append(click.style("Warnings:", fg="yellow", bold=True))
        lines.extend(f"- {item}" for item in report.warnings)
    return "\n".join(lines)


def render_analyses(analyses: list[FileAnalysis]) -> str:
    """Render one line per file verdict plus its violations."""
    lines: list[str] = []
    for analysis in analyses:
        label = click.style(
            analysis.category.label.upper(),
            fg=_SEVERITY_COLORS[analysis.category],
            bold=True,
        )
        lines.append(f"{label} {analysis.path} ({analysis.line_count} lines)")
        lines.extend(f"   - {item}" for item in analysis.violations)
    return "\n".join(lines)


def render_json(
    report: Report,
    *,
    generated_at: str | None,
    config_source: str | None,
) -> str:
    """Render the stable JSON report."""
    payload = build_json_payload(
        report,
        generated_at=generated_at,
        config_source=config_source,
    )
    return json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False) + "\n"


def build_json_payload(
    report: Report,
    *,
    generated_at: str | None,
    config_source: str | None,
) -> dict[str, Any]:
    """Build the JSON payload; ``generated_at`` is its only non-deterministic field."""
    projet = report.projet
    return {
        "backend": report.backend.to_dict(),
        "frontend": report.frontend.to_dict(),
        "projet": {
            "total": projet.total,
            "conforme": projet.conforme,
            "violations": projet.violations,
            "pourcentageConformes": projet.pourcentage_conformes,
            "pourcentageFakeAI": projet.pourcentage_fake_ai,
        },
        "details": {bucket.name: _serialize_bucket(bucket) for bucket in report.buckets},
        "baselines": {item.name: _serialize_baseline(item) for item in report.baselines},
        "warnings": list(report.warnings),
        "meta": {
            "generated_at": generated_at,
            "version": __version__,
            "config_source": config_source,
        },
    }


def serialize_analysis(analysis: FileAnalysis) -> dict[str, Any]:
    return {
        "path": analysis.path,
        "category": analysis.category.label,
        "violations": list(analysis.violations),
        "lineCount": analysis.line_count,
        "isEmpty": analysis.is_empty,
    }


def current_timestamp() -> str:
    return datetime.now(tz=UTC).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def write_report(path: Path, text: str) -> None:
    """Persist the report, wrapping any filesystem failure."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise ReportWriteError(f"Could not write report to {path}: {exc}") from exc


def _serialize_bucket(bucket: BucketResult) -> dict[str, Any]:
    return {
        "title": bucket.title,
        "side": bucket.side,
        "modules": [serialize_analysis(item) for item in bucket.modules],
        "stats": bucket.stats.to_dict(),
    }


def _serialize_baseline(baseline: BaselineStats) -> dict[str, Any]:
    return {
        "title": baseline.title,
        "side": baseline.side,
        "stats": baseline.stats.to_dict(),
        "source": baseline.source,
        "recordedAt": baseline.recorded_at,
    }


def _side_section(title: str, stats: BucketStats) -> list[str]:
    return [
        click.style(f"{title}:", bold=True),
        f"- Total modules: {stats.total}",
        f"- Conforme: {stats.conforme} ({percent(stats.conforme, stats.total):.1f}%)",
        f"- Minor violations: {stats.mineur} ({percent(stats.mineur, stats.total):.1f}%)",
        f"- Major violations: {stats.majeur} ({percent(stats.majeur, stats.total):.1f}%)",
        f"- Critical: {stats.critique} ({percent(stats.critique, stats.total):.1f}%)",
    ]


def _counts_lines(stats: BucketStats) -> list[str]:
    return [
        f"  - Total: {stats.total}",
        f"  - Conforme: {stats.conforme}",
        f"  - Mineur: {stats.mineur}",
        f"  - Majeur: {stats.majeur}",
        f"  - Critique: {stats.critique}",
    ]


def _bucket_section(bucket: BucketResult, *, critical_limit: int) -> list[str]:
    lines = [click.style(f"{bucket.title} [{bucket.side}]", bold=True)]
    lines.extend(_counts_lines(bucket.stats))
    critical = [item for item in bucket.modules if item.category is Severity.CRITIQUE]
    if critical and critical_limit > 0:
        lines.append("  Critical files:")
        for analysis in critical[:critical_limit]:
            lines.append(f"  * {analysis.path}: {analysis.violations[0]}")
        remaining = len(critical) - critical_limit
        if remaining > 0:
            lines.append(f"  * ... {remaining} more")
    return lines


def _baseline_section(baseline: BaselineStats) -> list[str]:
    provenance = baseline.source or "unspecified source"
    if baseline.recorded_at:
        provenance = f"{provenance}, {baseline.recorded_at}"
    lines = [
        click.style(f"{baseline.title} [{baseline.side}, baseline: {provenance}]", bold=True)
    ]
    lines.extend(_counts_lines(baseline.stats))
    return lines
