"""Project-wide report assembly from scanned buckets and recorded baselines."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal

from fakeai_audit.aggregate import BucketResult, BucketStats
from fakeai_audit.config import BaselineConfig


@dataclass(frozen=True, slots=True)
class BaselineStats:
    """Counts recorded by an earlier audit, merged without re-scanning."""

    name: str
    title: str
    side: str
    stats: BucketStats
    source: str = ""
    recorded_at: str | None = None

    def __post_init__(self) -> None:
        if not self.stats.is_consistent():
            raise ValueError(
                f"Baseline '{self.name}' is inconsistent: total={self.stats.total} but "
                f"categories sum to {self.stats.conforme + self.stats.violations}"
            )

    @classmethod
    def from_config(cls, config: BaselineConfig) -> BaselineStats:
        return cls(
            name=config.name,
            title=config.title,
            side=config.side,
            stats=BucketStats(
                total=config.total,
                conforme=config.conforme,
                mineur=config.mineur,
                majeur=config.majeur,
                critique=config.critique,
            ),
            source=config.source,
            recorded_at=config.recorded_at,
        )


@dataclass(frozen=True, slots=True)
class ProjectTotals:
    """Whole-project counts and percentages."""

    total: int
    conforme: int
    violations: int
    pourcentage_conformes: float
    pourcentage_fake_ai: float


@dataclass(slots=True)
class Report:
    """Final audit result, created once per run."""

    backend: BucketStats
    frontend: BucketStats
    projet: ProjectTotals
    buckets: list[BucketResult] = field(default_factory=list)
    baselines: list[BaselineStats] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


def build_report(buckets: list[BucketResult], baselines: list[BaselineStats]) -> Report:
    """Merge scanned and baseline statistics per side and compute percentages.

    A zero denominator yields ``0.0`` and records a warning instead of
    producing ``NaN``.
    """
    backend = _side_total("backend", buckets, baselines)
    frontend = _side_total("frontend", buckets, baselines)
    combined = backend + frontend

    warnings: list[str] = []
    for side, stats in (("backend", backend), ("frontend", frontend)):
        if stats.total == 0:
            warnings.append(f"{side} has no files; its percentages are reported as 0.0")
    if combined.total == 0:
        warnings.append("project has no files; percentages are reported as 0.0")

    projet = ProjectTotals(
        total=combined.total,
        conforme=combined.conforme,
        violations=combined.violations,
        pourcentage_conformes=percent(combined.conforme, combined.total),
        pourcentage_fake_ai=percent(combined.violations, combined.total),
    )
    return Report(
        backend=backend,
        frontend=frontend,
        projet=projet,
        buckets=list(buckets),
        baselines=list(baselines),
        warnings=warnings,
    )


def percent(part: int, total: int) -> float:
    """Return ``part / total`` as a percentage rounded to one decimal.

    The ratio is computed exactly and halves round up, so ``percent(1, 16)``
    is 6.3.
    """
    if total == 0:
        return 0.0
    exact = Decimal(part * 100) / Decimal(total)
    return float(exact.quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def _side_total(
    side: str,
    buckets: list[BucketResult],
    baselines: list[BaselineStats],
) -> BucketStats:
    total = BucketStats()
    for baseline in baselines:
        if baseline.side == side:
            total = total + baseline.stats
    for bucket in buckets:
        if bucket.side == side:
            total = total + bucket.stats
    return total
