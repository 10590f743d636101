"""Resolve configured buckets into ordered scan targets."""

from __future__ import annotations

import fnmatch
from dataclasses import dataclass
from pathlib import Path, PureWindowsPath

from fakeai_audit.config import BucketConfig


@dataclass(frozen=True, slots=True)
class ScanTarget:
    """One file to classify: the reported identifier and the path to read."""

    display: str
    path: Path


def resolve_targets(bucket: BucketConfig, root: Path) -> list[ScanTarget]:
    """Return explicit paths in config order, then sorted glob matches.

    Every explicit path yields one target, repeats included, and missing
    files are kept so the classifier records a read error for them. Glob
    matches that resolve to a file already listed are skipped.
    """
    targets: list[ScanTarget] = []
    seen: set[Path] = set()

    for raw in bucket.paths:
        path = _resolve_path(raw, root)
        seen.add(path.resolve())
        targets.append(ScanTarget(display=raw, path=path))

    for display in discover(root, includes=bucket.include, excludes=bucket.exclude):
        path = root / display
        resolved = path.resolve()
        if resolved in seen:
            continue
        seen.add(resolved)
        targets.append(ScanTarget(display=display, path=path))
    return targets


def discover(root: Path, *, includes: list[str], excludes: list[str]) -> list[str]:
    """Return root-relative POSIX paths of files matching the include globs."""
    found: set[str] = set()
    for pattern in includes:
        for candidate in root.glob(pattern):
            if not candidate.is_file():
                continue
            relative = candidate.relative_to(root).as_posix()
            if excludes and any(fnmatch.fnmatch(relative, item) for item in excludes):
                continue
            found.add(relative)
    return sorted(found)


def _resolve_path(raw: str, root: Path) -> Path:
    candidate = Path(raw)
    if candidate.is_absolute() or PureWindowsPath(raw).is_absolute():
        return candidate
    return root / candidate
