"""Tests for report assembly and percentage math."""

from __future__ import annotations

import pytest

from fakeai_audit.aggregate import BucketResult, BucketStats
from fakeai_audit.config import DEFAULT_BASELINES, BaselineConfig
from fakeai_audit.report import BaselineStats, build_report, percent


def test_baselines_and_scanned_frontend_merge_into_project_totals() -> None:
    baselines = [BaselineStats.from_config(item) for item in DEFAULT_BASELINES]
    frontend = _bucket(
        "frontend",
        "frontend",
        BucketStats(total=46, conforme=20, mineur=15, majeur=6, critique=5),
    )

    report = build_report([frontend], baselines)

    assert report.backend == BucketStats(total=39, conforme=14, mineur=21, majeur=1, critique=3)
    assert report.frontend.total == 46
    assert report.projet.total == 85
    assert report.projet.conforme == 34
    assert report.projet.violations == 51
    assert report.projet.pourcentage_conformes == 40.0
    assert report.projet.pourcentage_fake_ai == 60.0
    assert report.warnings == []


@pytest.mark.parametrize(
    ("conforme", "total"),
    [(1, 3), (2, 3), (10, 85), (7, 9), (0, 1), (46, 46)],
)
def test_percentages_sum_to_one_hundred(conforme: int, total: int) -> None:
    bucket = _bucket(
        "b",
        "backend",
        BucketStats(total=total, conforme=conforme, critique=total - conforme),
    )
    report = build_report([bucket], [])
    summed = report.projet.pourcentage_conformes + report.projet.pourcentage_fake_ai
    assert abs(summed - 100.0) <= 0.1


def test_scanned_backend_buckets_add_to_backend_side() -> None:
    buckets = [
        _bucket("intelligence", "backend", BucketStats(total=2, conforme=1, majeur=1)),
        _bucket("infra", "backend", BucketStats(total=1, mineur=1)),
        _bucket("frontend", "frontend", BucketStats(total=1, conforme=1)),
    ]
    report = build_report(buckets, [])
    assert report.backend == BucketStats(total=3, conforme=1, mineur=1, majeur=1)
    assert report.frontend == BucketStats(total=1, conforme=1)
    for stats in (report.backend, report.frontend):
        assert stats.is_consistent()


def test_empty_project_reports_zero_percentages_with_warning() -> None:
    report = build_report([], [])
    assert report.projet.total == 0
    assert report.projet.pourcentage_conformes == 0.0
    assert report.projet.pourcentage_fake_ai == 0.0
    assert any("project has no files" in item for item in report.warnings)
    assert any(item.startswith("frontend has no files") for item in report.warnings)


def test_empty_side_only_warns_for_that_side() -> None:
    report = build_report([_bucket("b", "backend", BucketStats(total=1, conforme=1))], [])
    assert report.warnings == ["frontend has no files; its percentages are reported as 0.0"]


def test_percent_rounds_to_one_decimal() -> None:
    assert percent(1, 3) == 33.3
    assert percent(2, 3) == 66.7
    assert percent(0, 0) == 0.0


@pytest.mark.parametrize(
    ("part", "total", "expected"),
    [(1, 16, 6.3), (3, 16, 18.8), (15, 16, 93.8), (1, 40, 2.5)],
)
def test_percent_rounds_exact_halves_up(part: int, total: int, expected: float) -> None:
    assert percent(part, total) == expected


def test_inconsistent_baseline_is_rejected() -> None:
    config = BaselineConfig(name="legacy", side="backend", total=5, conforme=1, mineur=1)
    with pytest.raises(ValueError, match="Baseline 'legacy' is inconsistent"):
        BaselineStats.from_config(config)


def test_baseline_keeps_provenance() -> None:
    config = BaselineConfig(
        name="core",
        side="backend",
        total=2,
        conforme=2,
        source="manual audit",
        recorded_at="2025-07-01",
    )
    baseline = BaselineStats.from_config(config)
    assert baseline.title == "core"
    assert baseline.source == "manual audit"
    assert baseline.recorded_at == "2025-07-01"


def _bucket(name: str, side: str, stats: BucketStats) -> BucketResult:
    return BucketResult(name=name, title=name, side=side, modules=[], stats=stats)
