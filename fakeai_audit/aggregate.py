"""Bucket-level aggregation of file verdicts."""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from fakeai_audit.classifier import FileAnalysis, classify_file
from fakeai_audit.config import BucketConfig
from fakeai_audit.discovery import ScanTarget, resolve_targets
from fakeai_audit.rules import PatternCatalog
from fakeai_audit.rules.base import Severity


@dataclass(frozen=True, slots=True)
class BucketStats:
    """Per-severity file counts for one group of files."""

    total: int = 0
    conforme: int = 0
    mineur: int = 0
    majeur: int = 0
    critique: int = 0

    @classmethod
    def from_analyses(cls, analyses: Iterable[FileAnalysis]) -> BucketStats:
        counts: Counter[Severity] = Counter()
        total = 0
        for analysis in analyses:
            total += 1
            counts[analysis.category] += 1
        return cls(
            total=total,
            conforme=counts[Severity.CONFORME],
            mineur=counts[Severity.MINEUR],
            majeur=counts[Severity.MAJEUR],
            critique=counts[Severity.CRITIQUE],
        )

    def __add__(self, other: BucketStats) -> BucketStats:
        return BucketStats(
            total=self.total + other.total,
            conforme=self.conforme + other.conforme,
            mineur=self.mineur + other.mineur,
            majeur=self.majeur + other.majeur,
            critique=self.critique + other.critique,
        )

    @property
    def violations(self) -> int:
        return self.mineur + self.majeur + self.critique

    def is_consistent(self) -> bool:
        return self.total == self.conforme + self.violations

    def count(self, severity: Severity) -> int:
        return getattr(self, severity.label)

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "conforme": self.conforme,
            "mineur": self.mineur,
            "majeur": self.majeur,
            "critique": self.critique,
        }


@dataclass(slots=True)
class BucketResult:
    """Raw verdicts and statistics for one scanned bucket."""

    name: str
    title: str
    side: str
    modules: list[FileAnalysis] = field(default_factory=list)
    stats: BucketStats = field(default_factory=BucketStats)


def aggregate_bucket(
    bucket: BucketConfig,
    targets: list[ScanTarget],
    catalog: PatternCatalog,
) -> BucketResult:
    """Classify every target in input order and count each verdict once."""
    modules = [
        classify_file(target.path, catalog, display_path=target.display) for target in targets
    ]
    return BucketResult(
        name=bucket.name,
        title=bucket.title,
        side=bucket.side,
        modules=modules,
        stats=BucketStats.from_analyses(modules),
    )


def scan_buckets(
    buckets: list[BucketConfig],
    root: Path,
    catalog: PatternCatalog,
    *,
    on_bucket: Callable[[BucketConfig, int], None] | None = None,
) -> list[BucketResult]:
    """Resolve and aggregate every configured bucket sequentially."""
    results: list[BucketResult] = []
    for bucket in buckets:
        targets = resolve_targets(bucket, root)
        if on_bucket is not None:
            on_bucket(bucket, len(targets))
        results.append(aggregate_bucket(bucket, targets, catalog))
    return results
