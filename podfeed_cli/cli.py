"""podfeed CLI - Command-line interface for validating podcast RSS feeds.

The CLI is a thin wrapper around the Python API (see validation/).
All business logic lives in the library; the CLI handles user interaction.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import click

from podfeed_cli.config import resolve_run_config
from podfeed_cli.errors import PodfeedError
from podfeed_cli.json_output import ErrorDetail, error_envelope, success_envelope
from podfeed_cli.output import detail, error, info, success, warn
from podfeed_cli.validation import ValidationReport, Violation, validate_file


def should_output_json(ctx: click.Context, json_flag: bool = False) -> bool:
    """Determine if JSON output should be used.

    Global --format=json takes precedence, but the per-command --json flag
    also works.

    Args:
        ctx: Click context containing the format preference.
        json_flag: Per-command --json flag value.

    Returns:
        True if JSON output should be used, False for text output.
    """
    obj = ctx.find_root().obj or {}
    global_format = obj.get("format", "text")
    return global_format == "json" or json_flag


def output_json_envelope(envelope: Any) -> None:
    """Output a JSON envelope to stdout."""
    click.echo(envelope.to_json())


@click.group()
@click.version_option(package_name="podfeed-cli")
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "text"]),
    default="text",
    help="Output format (json for machine parsing, text for humans).",
)
@click.pass_context
def cli(ctx: click.Context, output_format: str) -> None:
    """podfeed - Validate podcast RSS feeds before publishing them."""
    ctx.ensure_object(dict)
    ctx.obj["format"] = output_format


def _output_validate_json(report: ValidationReport) -> None:
    """Output validation results as JSON envelope."""
    data = report.to_dict()
    if report.passed:
        envelope = success_envelope("validate", data)
    else:
        errors = [ErrorDetail(type="Violation", message=v.message) for v in report.errors]
        envelope = error_envelope("validate", errors, data=data)
    output_json_envelope(envelope)


def _print_violation(report: ValidationReport, violation: Violation) -> None:
    """Print a single violation at the level its severity and mode call for."""
    if report.is_error(violation):
        error(violation.message)
    else:
        warn(violation.message)


def _print_validate_summary(report: ValidationReport) -> None:
    """Print validation summary message."""
    warning_count = len(report.warnings)
    if report.passed:
        if warning_count:
            success(
                f"Feed is valid ({warning_count} warning{'s' if warning_count != 1 else ''})"
            )
            detail("Use --strict to fail on unexpected tags")
        else:
            success("Feed is valid")
        return

    error_count = len(report.errors)
    parts = [f"{error_count} error{'s' if error_count != 1 else ''}"]
    if warning_count:
        parts.append(f"{warning_count} warning{'s' if warning_count != 1 else ''}")
    error(f"Validation failed: {', '.join(parts)}")


@cli.command()
@click.argument("feed", type=click.Path(path_type=Path), required=False)
@click.option(
    "-i",
    "--input",
    "input_path",
    type=click.Path(path_type=Path),
    help="Input RSS feed XML file (alternative to the FEED argument).",
)
@click.option(
    "--strict",
    is_flag=True,
    help="Fail validation if unhandled tags occur in the feed.",
)
@click.option(
    "--ci/--no-ci",
    "ci",
    default=None,
    help="Running in a CI pipeline (defaults to the CI environment variable).",
)
@click.option(
    "--public-url-base",
    help="URL prefix of the deployment being validated; not probed in CI.",
)
@click.option("--offline", is_flag=True, help="Do not probe remote URLs.")
@click.option(
    "--config",
    "config_file",
    type=click.Path(path_type=Path),
    help="Config file (default: ./podfeed.yaml).",
)
@click.option("--json", "json_output", is_flag=True, help="Output results as JSON")
@click.option("--verbose", "-v", is_flag=True, help="Log each check as it runs")
@click.pass_context
def validate(
    ctx: click.Context,
    feed: Path | None,
    input_path: Path | None,
    strict: bool,
    ci: bool | None,
    public_url_base: str | None,
    offline: bool,
    config_file: Path | None,
    json_output: bool,
    verbose: bool,
) -> None:
    """Validate a podcast RSS feed.

    Checks required tags, data types, allowed values and consistency
    (e.g. unique guids) and reports every problem found. Exits with 0 if
    the feed is valid and 1 otherwise.

    FEED is the RSS XML file to validate.

    Examples:

        podfeed validate feed.xml

        podfeed validate feed.xml --strict --json
    """
    use_json = should_output_json(ctx, json_output)

    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    path = feed or input_path
    if path is None:
        raise click.UsageError("Provide a feed file (FEED argument or --input).")

    try:
        config = resolve_run_config(
            strict=strict or None,
            ci=ci,
            public_url_base=public_url_base,
            offline=offline or None,
            config_file=config_file,
        )
        report = validate_file(path, config)
    except PodfeedError as err:
        if use_json:
            envelope = error_envelope(
                "validate",
                [ErrorDetail(type=type(err).__name__, message=err.message)],
            )
            output_json_envelope(envelope)
        else:
            error(err.message)
        raise SystemExit(1) from err

    if use_json:
        _output_validate_json(report)
    else:
        for entry in report.entries:
            if isinstance(entry, str):
                info(entry)
            else:
                _print_violation(report, entry)
        _print_validate_summary(report)

    raise SystemExit(report.exit_code)
