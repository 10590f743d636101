"""Helpers for building synthetic source trees in tests."""

from __future__ import annotations

from pathlib import Path


def write_file(root: Path, rel_path: str, content: str) -> Path:
    target = root / rel_path
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(content, encoding="utf-8")
    return target


def write_config(root: Path, lines: list[str], filename: str = ".fakeai-audit.toml") -> Path:
    return write_file(root, filename, "\n".join(lines) + "\n")
