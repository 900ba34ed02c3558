"""CLI entrypoint for side-effects-lint."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from side_effects_lint import __version__
from side_effects_lint.config import (
    OUTPUT_FORMATS,
    AppConfig,
    default_config_template,
    load_app_config,
)
from side_effects_lint.discovery import discover_files, load_sources
from side_effects_lint.output import render_human, render_json, render_report, write_report
from side_effects_lint.rules import build_rule_set, list_rule_info
from side_effects_lint.rules.base import RuleSet
from side_effects_lint.scanner import scan_sources

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="side-effects-lint",
    no_args_is_help=True,
    help="Find JS/TS code that runs as soon as a module is imported.",
)


def version_callback(value: bool) -> None:
    """Print version and exit when --version is provided."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option("--version", help="Show version and exit.", callback=version_callback),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging.")] = False,
) -> None:
    """Root command callback."""
    _ = version
    _configure_logging(verbose)


@app.command("scan")
def scan_command(
    roots: Annotated[
        list[Path] | None,
        typer.Argument(help="Directories to scan. Defaults to the configured roots."),
    ] = None,
    repo: Annotated[Path, typer.Option(help="Repository path.")] = Path("."),
    format: Annotated[
        str | None, typer.Option(help="Output format: text|human|json.", show_default="text")
    ] = None,
    report: Annotated[
        Path | None, typer.Option(help="Report file path, relative to the repository.")
    ] = None,
    no_report: Annotated[
        bool, typer.Option("--no-report", help="Do not write a report file.")
    ] = False,
    fail_on_findings: Annotated[
        bool | None,
        typer.Option(
            "--fail-on-findings/--no-fail-on-findings",
            help="Exit nonzero when any side effect is found.",
        ),
    ] = None,
    extension: Annotated[
        list[str] | None, typer.Option("--extension", help="File extension to scan.")
    ] = None,
    include: Annotated[list[str] | None, typer.Option(help="Include glob pattern.")] = None,
    exclude: Annotated[list[str] | None, typer.Option(help="Exclude glob pattern.")] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Scan source directories for top-level side effects."""
    app_config = _load_config_or_raise(repo, config_file)
    output_format = (format or app_config.format).lower()
    if output_format not in OUTPUT_FORMATS:
        choices = ", ".join(sorted(OUTPUT_FORMATS))
        raise typer.BadParameter(f"format must be one of: {choices}", param_hint="--format")
    if report is not None and no_report:
        raise typer.BadParameter("Use either --report or --no-report, not both.")

    repo_path = repo.resolve()
    rule_set = _build_configured_rules_or_raise(app_config)
    root_names = [str(item) for item in roots] if roots else list(app_config.roots)
    root_paths = [_resolve_under(repo_path, Path(name)) for name in root_names]

    files = discover_files(
        root_paths,
        extensions=extension if extension else app_config.extensions,
        include=include if include is not None else app_config.include,
        exclude=exclude if exclude is not None else app_config.exclude,
        base=repo_path,
    )
    result = scan_sources(load_sources(files, base=repo_path), rule_set=rule_set)
    logger.debug(
        "Scan finished: %d finding(s) across %d file(s)",
        len(result.findings),
        result.files_scanned,
    )

    report_text = render_report(result.findings)
    if output_format == "json":
        typer.echo(render_json(result, roots=root_names))
    elif output_format == "human":
        typer.echo(render_human(result))
    else:
        typer.echo(report_text, nl=False)

    report_path = _resolve_report_path(repo_path, report, no_report, app_config)
    if report_path is not None:
        write_report(report_path, report_text)
        logger.debug("Report written to %s", report_path)

    should_fail = fail_on_findings if fail_on_findings is not None else app_config.fail_on_findings
    if should_fail and result.findings:
        raise typer.Exit(code=1)


@app.command("rules")
def rules_command(
    repo: Annotated[Path, typer.Option(help="Repository path.")] = Path("."),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """List side-effect rules in priority order."""
    output_format = _listing_format_or_raise(format)

    app_config = _load_config_or_raise(repo, config_file)
    active_ids = set(_build_configured_rules_or_raise(app_config).rule_ids)
    rule_info = list_rule_info()

    if output_format == "json":
        payload = {
            "rules": [
                {
                    "rule_id": item.rule_id,
                    "priority": item.priority,
                    "reason": item.reason,
                    "description": item.description,
                    "enabled": item.rule_id in active_ids,
                }
                for item in rule_info
            ],
            "meta": {"config_source": app_config.source},
        }
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = ["Available rules (highest priority first):"]
    for item in rule_info:
        status = "enabled" if item.rule_id in active_ids else "disabled"
        lines.append(f"{item.priority}. {item.rule_id} [{status}] - {item.description}")
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
    output_format = _listing_format_or_raise(format)

    app_config = _load_config_or_raise(repo, config_file)
    payload = app_config.to_dict()
    payload["active_rule_ids"] = _build_configured_rules_or_raise(app_config).rule_ids

    if output_format == "json":
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = [
        "Resolved configuration:",
        f"- source: {payload['source'] or 'defaults'}",
        f"- roots: {payload['roots']}",
        f"- extensions: {payload['extensions']}",
        f"- include: {payload['include']}",
        f"- exclude: {payload['exclude']}",
        f"- format: {payload['format']}",
        f"- report: {payload['report']}",
        f"- fail_on_findings: {payload['fail_on_findings']}",
        f"- rules.enable: {payload['rules']['enable']}",
        f"- rules.disable: {payload['rules']['disable']}",
        f"- rules.sdk_namespaces: {payload['rules']['sdk_namespaces']}",
        f"- active_rule_ids: {payload['active_rule_ids']}",
    ]
    typer.echo("\n".join(lines))


@app.command("config-init")
def config_init_command(
    repo: Annotated[Path, typer.Option(help="Repository path.")] = Path("."),
    out: Annotated[
        Path, typer.Option(help="Config file to create, relative to the repository.")
    ] = Path(".side-effects-lint.toml"),
    force: Annotated[
        bool,
        typer.Option("--force", help="Replace an existing config file."),
    ] = False,
) -> None:
    """Write a starter config listing the default roots and every rule."""
    target = _resolve_under(repo.resolve(), out)
    if target.exists() and not force:
        raise typer.BadParameter(f"{target} already exists; pass --force to replace it.")
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(default_config_template(), encoding="utf-8")
    typer.echo(f"Starter config written to {target}")


@app.command("config-validate")
def config_validate_command(
    repo: Annotated[Path, typer.Option(help="Repository path.")] = Path("."),
    config_file: Annotated[
        Path,
        typer.Option("--config", help="Path to config TOML file to validate."),
    ] = Path(".side-effects-lint.toml"),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
) -> None:
    """Validate a config file and report active rules."""
    output_format = _listing_format_or_raise(format)

    app_config = _load_config_or_raise(repo, config_file)
    rule_set = _build_configured_rules_or_raise(app_config)
    repo_path = repo.resolve()
    missing_roots = [
        root for root in app_config.roots if not _resolve_under(repo_path, Path(root)).is_dir()
    ]

    if output_format == "json":
        payload = {
            "ok": True,
            "source": app_config.source,
            "active_rule_ids": rule_set.rule_ids,
            "missing_roots": missing_roots,
        }
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = [f"Config is valid: {app_config.source}"]
    lines.append(f"- side-effect rules ({len(rule_set.rule_ids)}): {', '.join(rule_set.rule_ids)}")
    if missing_roots:
        lines.append(f"- roots not found (scanned as empty): {', '.join(missing_roots)}")
    typer.echo("\n".join(lines))


def main() -> None:
    """Console script entrypoint."""
    app()


def _configure_logging(verbose: bool) -> None:
    # Without --verbose, warnings reach stderr through logging's last-resort handler.
    if not verbose:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    logging.getLogger("side_effects_lint").setLevel(logging.DEBUG)


def _listing_format_or_raise(value: str) -> str:
    output_format = value.lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")
    return output_format


def _load_config_or_raise(repo: Path, config_file: Path | None = None) -> AppConfig:
    try:
        return load_app_config(repo, config_path=config_file)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc


def _build_configured_rules_or_raise(app_config: AppConfig) -> RuleSet:
    try:
        return build_rule_set(
            enabled_rule_ids=app_config.rules.enable,
            disabled_rule_ids=app_config.rules.disable,
            sdk_namespaces=app_config.rules.sdk_namespaces,
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config.rules") from exc


def _resolve_under(repo: Path, path: Path) -> Path:
    return path if path.is_absolute() else repo / path


def _resolve_report_path(
    repo: Path, report: Path | None, no_report: bool, app_config: AppConfig
) -> Path | None:
    if no_report:
        return None
    if report is not None:
        return _resolve_under(repo, report)
    if app_config.report is None:
        return None
    return _resolve_under(repo, Path(app_config.report))
