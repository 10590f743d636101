"""CLI entrypoint for fakeai-audit."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated

import click
import typer

from fakeai_audit import __version__
from fakeai_audit.aggregate import scan_buckets
from fakeai_audit.classifier import classify_file
from fakeai_audit.config import AppConfig, BucketConfig, default_config_template, load_app_config
from fakeai_audit.output import (
    ReportWriteError,
    current_timestamp,
    render_analyses,
    render_human,
    render_json,
    serialize_analysis,
    write_report,
)
from fakeai_audit.report import BaselineStats, build_report
from fakeai_audit.rules import PatternCatalog, build_catalog, list_rule_info

app = typer.Typer(
    name="fakeai-audit",
    help="Audit source trees for fabricated-AI signatures and report per-bucket statistics.",
)


def version_callback(value: bool) -> None:
    """Print version and exit when --version is provided."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: Annotated[
        bool,
        typer.Option("--version", help="Show version and exit.", callback=version_callback),
    ] = False,
) -> None:
    """Run the full scan when no command is given."""
    _ = version
    if ctx.invoked_subcommand is None:
        _run_scan(
            repo=Path("."),
            config_file=None,
            output=None,
            output_format=None,
            fail_above=None,
            timestamp=True,
        )


@app.command("scan")
def scan_command(
    repo: Annotated[Path, typer.Option(help="Repository path.")] = Path("."),
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
    output: Annotated[
        Path | None, typer.Option(help="JSON report path.", show_default="config output")
    ] = None,
    format: Annotated[
        str | None, typer.Option(help="Console format: human|json.", show_default="human")
    ] = None,
    fail_above: Annotated[
        float | None,
        typer.Option(help="Exit nonzero if the fake AI percentage is above this value."),
    ] = None,
    timestamp: Annotated[
        bool,
        typer.Option(
            "--timestamp/--no-timestamp",
            help="Embed generation time in the JSON report.",
        ),
    ] = True,
) -> None:
    """Scan every configured bucket, print the report and persist it as JSON."""
    _run_scan(
        repo=repo,
        config_file=config_file,
        output=output,
        output_format=format,
        fail_above=fail_above,
        timestamp=timestamp,
    )


@app.command("classify")
def classify_command(
    paths: Annotated[list[Path], typer.Argument(help="Files to classify.")],
    repo: Annotated[Path, typer.Option(help="Repository path.")] = Path("."),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Classify individual files without writing a report."""
    output_format = _validate_format(format)
    app_config = _load_config_or_raise(repo, config_file)
    catalog = _build_catalog_or_raise(app_config)
    analyses = [classify_file(path, catalog, display_path=str(path)) for path in paths]

    if output_format == "json":
        payload = {"files": [serialize_analysis(item) for item in analyses]}
        typer.echo(json.dumps(payload, sort_keys=True))
        return
    typer.echo(render_analyses(analyses))


@app.command("rules")
def rules_command(
    repo: Annotated[Path, typer.Option(help="Repository path.")] = Path("."),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """List detection rules by tier."""
    output_format = _validate_format(format)
    app_config = _load_config_or_raise(repo, config_file)
    catalog = _build_catalog_or_raise(app_config)
    active_ids = set(catalog.rule_ids)
    rule_info = list_rule_info(app_config.patterns)

    if output_format == "json":
        payload = {
            "rules": [
                {
                    "rule_id": item.rule_id,
                    "severity": item.severity,
                    "pattern": item.pattern,
                    "ignore_case": item.ignore_case,
                    "description": item.description,
                    "builtin": item.builtin,
                    "enabled": item.rule_id in active_ids,
                }
                for item in rule_info
            ],
            "filename_markers": list(catalog.filename_markers),
            "meta": {"config_source": app_config.source},
        }
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = ["Available rules:"]
    for item in rule_info:
        status = "enabled" if item.rule_id in active_ids else "disabled"
        flags = "i" if item.ignore_case else ""
        lines.append(
            f"- {item.rule_id} [{item.severity}, {status}] /{item.pattern}/{flags}"
            f" - {item.description}"
        )
    lines.append(f"Filename markers: {', '.join(catalog.filename_markers) or 'none'}")
    typer.echo("\n".join(lines))


@app.command("config")
def config_command(
    repo: Annotated[Path, typer.Option(help="Repository path.")] = Path("."),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Show resolved configuration."""
    output_format = _validate_format(format)
    app_config = _load_config_or_raise(repo, config_file)
    catalog = _build_catalog_or_raise(app_config)
    payload = app_config.to_dict()
    payload["active_rule_ids"] = list(catalog.rule_ids)

    if output_format == "json":
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = [
        "Resolved configuration:",
        f"- source: {payload['source'] or 'defaults'}",
        f"- format: {payload['format']}",
        f"- output: {payload['output']}",
        f"- root: {payload['root']}",
        f"- fail_above: {payload['fail_above']}",
        f"- rules.enable: {payload['rules']['enable']}",
        f"- rules.disable: {payload['rules']['disable']}",
        f"- buckets: {[item.name for item in app_config.buckets]}",
        f"- baselines: {[item.name for item in app_config.baselines]}",
        f"- active_rule_ids: {payload['active_rule_ids']}",
    ]
    typer.echo("\n".join(lines))


@app.command("config-init")
def config_init_command(
    out: Annotated[Path, typer.Option(help="Output path for starter config TOML.")] = Path(
        ".fakeai-audit.toml"
    ),
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite if file already exists."),
    ] = False,
) -> None:
    """Create a starter repository config file."""
    out_path = out.resolve()
    if out_path.exists() and not force:
        raise typer.BadParameter(
            f"Refusing to overwrite existing file: {out_path}. Use --force to overwrite."
        )
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(default_config_template(), encoding="utf-8")
    typer.echo(f"Wrote starter config: {out_path}")


@app.command("config-validate")
def config_validate_command(
    repo: Annotated[Path, typer.Option(help="Repository path.")] = Path("."),
    config_file: Annotated[
        Path,
        typer.Option("--config", help="Path to config TOML file to validate."),
    ] = Path(".fakeai-audit.toml"),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
) -> None:
    """Validate a config file and report buckets and active rules."""
    output_format = _validate_format(format)
    app_config = _load_config_or_raise(repo, config_file)
    catalog = _build_catalog_or_raise(app_config)
    _baselines_or_raise(app_config)
    payload = {
        "ok": True,
        "source": app_config.source,
        "buckets": [item.name for item in app_config.buckets],
        "baselines": [item.name for item in app_config.baselines],
        "active_rule_ids": list(catalog.rule_ids),
    }
    if output_format == "json":
        typer.echo(json.dumps(payload, sort_keys=True))
        return
    typer.echo(
        "\n".join(
            [
                "Config is valid.",
                f"- source: {payload['source']}",
                f"- buckets: {payload['buckets']}",
                f"- baselines: {payload['baselines']}",
                f"- active_rule_ids: {payload['active_rule_ids']}",
            ]
        )
    )


def main() -> None:
    """Console script entrypoint."""
    app()


def _run_scan(
    *,
    repo: Path,
    config_file: Path | None,
    output: Path | None,
    output_format: str | None,
    fail_above: float | None,
    timestamp: bool,
) -> None:
    app_config = _load_config_or_raise(repo, config_file)
    resolved_format = _validate_format(output_format or app_config.format)
    catalog = _build_catalog_or_raise(app_config)
    baselines = _baselines_or_raise(app_config)

    repo_path = repo.resolve()
    root = Path(app_config.root)
    if not root.is_absolute():
        root = repo_path / root
    report_path = output if output is not None else _repo_relative(repo_path, app_config.output)

    buckets = scan_buckets(app_config.buckets, root, catalog, on_bucket=_echo_progress)
    report = build_report(buckets, baselines)
    for warning in report.warnings:
        typer.echo(click.style(f"warning: {warning}", fg="yellow"), err=True)

    json_text = render_json(
        report,
        generated_at=current_timestamp() if timestamp else None,
        config_source=app_config.source,
    )
    if resolved_format == "json":
        typer.echo(json_text, nl=False)
    else:
        typer.echo(render_human(report))

    try:
        write_report(report_path, json_text)
    except ReportWriteError as exc:
        typer.echo(click.style(f"error: {exc}", fg="red"), err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"Report written to: {report_path}", err=True)

    threshold = fail_above if fail_above is not None else app_config.fail_above
    if threshold is not None and report.projet.pourcentage_fake_ai > threshold:
        raise typer.Exit(code=1)


def _echo_progress(bucket: BucketConfig, target_count: int) -> None:
    typer.echo(f"Analyzing {bucket.title} ({target_count} files)...", err=True)


def _repo_relative(repo: Path, raw: str) -> Path:
    path = Path(raw)
    return path if path.is_absolute() else repo / path


def _validate_format(value: str) -> str:
    output_format = value.lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")
    return output_format


def _load_config_or_raise(repo: Path, config_file: Path | None = None) -> AppConfig:
    try:
        return load_app_config(repo, config_path=config_file)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc


def _build_catalog_or_raise(app_config: AppConfig) -> PatternCatalog:
    try:
        return build_catalog(
            enabled_rule_ids=app_config.rule_enable,
            disabled_rule_ids=app_config.rule_disable,
            extra_patterns=app_config.patterns,
            filename_markers=app_config.filename_markers,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config.rules") from exc


def _baselines_or_raise(app_config: AppConfig) -> list[BaselineStats]:
    try:
        return [BaselineStats.from_config(item) for item in app_config.baselines]
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config.baselines") from exc
