"""Per-file classification against the pattern catalog."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from fakeai_audit.rules import PatternCatalog
from fakeai_audit.rules.base import TIER_ORDER, Severity
from fakeai_audit.rules.filename import FILENAME_VIOLATION, filename_is_suspicious

EMPTY_FILE_VIOLATION = "empty file"


@dataclass(frozen=True, slots=True)
class FileAnalysis:
    """Classification verdict for exactly one file."""

    path: str
    category: Severity = Severity.CONFORME
    violations: tuple[str, ...] = ()
    line_count: int = 0
    is_empty: bool = False


def classify_file(
    path: Path,
    catalog: PatternCatalog,
    *,
    display_path: str | None = None,
) -> FileAnalysis:
    """Read and classify a file. Never raises on unreadable input.

    A file that cannot be read or decoded as UTF-8 is reported as critique
    with a single ``read error`` violation.
    """
    label = display_path if display_path is not None else str(path)
    try:
        # Decoded from bytes so line endings reach the rules untranslated.
        content = path.read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        return FileAnalysis(
            path=label,
            category=Severity.CRITIQUE,
            violations=(f"read error: {exc}",),
            line_count=0,
            is_empty=True,
        )
    return classify_text(content, catalog, path=label)


def classify_text(content: str, catalog: PatternCatalog, *, path: str) -> FileAnalysis:
    """Classify already-loaded file content."""
    line_count = len(content.split("\n"))
    if not content.strip():
        return FileAnalysis(
            path=path,
            category=Severity.MINEUR,
            violations=(EMPTY_FILE_VIOLATION,),
            line_count=line_count,
            is_empty=True,
        )

    category, violations = evaluate_tiers(content, catalog)
    if category is Severity.CONFORME and filename_is_suspicious(path, catalog.filename_markers):
        category = Severity.MAJEUR
        violations = (FILENAME_VIOLATION,)

    return FileAnalysis(
        path=path,
        category=category,
        violations=violations,
        line_count=line_count,
        is_empty=False,
    )


def evaluate_tiers(content: str, catalog: PatternCatalog) -> tuple[Severity, tuple[str, ...]]:
    """Return the highest tier with any match and one violation per matching rule.

    Tiers are tested from critique down; lower tiers are not evaluated once a
    tier matched.
    """
    for severity in TIER_ORDER:
        hits = tuple(
            rule.violation()
            for rule in catalog.rules_for_severity(severity)
            if rule.matches(content)
        )
        if hits:
            return (severity, hits)
    return (Severity.CONFORME, ())
