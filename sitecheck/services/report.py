"""Pass/fail aggregation and terminal rendering of checker results."""

from typing import Sequence

import click

from sitecheck.models.check_result import CheckResult
from sitecheck.models.report import Report

RULE_WIDTH = 50


def summarize(base_url: str, results: Sequence[CheckResult]) -> Report:
    """Split *results* into passes (status exactly 200) and failures."""
    failures = [r for r in results if not r.passed]
    return Report(
        base_url=base_url,
        total=len(results),
        passed=len(results) - len(failures),
        failed=len(failures),
        results=list(results),
        failures=failures,
    )


def exit_code(report: Report) -> int:
    return 1 if report.failed else 0


def format_result(result: CheckResult) -> str:
    if result.passed:
        return f"{click.style('✓', fg='green')} {result.url}"
    detail = f"status: {result.status}"
    if result.error is not None:
        detail += f", err: {result.error}"
    return f"{click.style('✗', fg='red')} {result.url} ({detail})"


def render_header(base_url: str) -> None:
    click.echo(f"Testing URLs against: {base_url}")
    click.echo("=" * RULE_WIDTH)


def render_collected(count: int) -> None:
    click.echo(f"\nCollected {count} URLs to test")
    click.echo("-" * RULE_WIDTH)


def render_text(report: Report) -> None:
    """Print one line per result, then the summary and the failure list."""
    for result in report.results:
        click.echo(format_result(result))

    click.echo()
    click.echo("=" * RULE_WIDTH)
    click.echo(
        f"Results: {click.style(f'{report.passed} passed', fg='green')}, "
        f"{click.style(f'{report.failed} failed', fg='red')}"
    )

    if report.failures:
        click.echo("\nFailed URLs:")
        for result in report.failures:
            click.echo(f"  - {result.url} (status: {result.status})")


def render_json(report: Report) -> None:
    click.echo(report.model_dump_json(indent=2))
