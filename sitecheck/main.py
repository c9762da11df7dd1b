import asyncio
import logging
import logging.config

import click
from pydantic import ValidationError

from sitecheck.models.check_config import (
    DEFAULT_BASE_URL,
    DEFAULT_CONTENT_DIR,
    DEFAULT_WORKERS,
    CheckConfig,
)
from sitecheck.services.checker import run_check
from sitecheck.services.collector import collect_urls
from sitecheck.services.duration import parse_duration
from sitecheck.services.report import (
    exit_code,
    render_collected,
    render_header,
    render_json,
    render_text,
    summarize,
)

logger = logging.getLogger(__name__)

CONTEXT_SETTINGS = dict(help_option_names=["-h", "--help"], show_default=True)


def configure_logging(level: str) -> None:
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "json": {
                    "format": '{"time": "%(asctime)s", "level": "%(levelname)s", "logger": "%(name)s", "message": "%(message)s"}',
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "json",
                    "stream": "ext://sys.stderr",
                },
            },
            "root": {"level": level, "handlers": ["console"]},
        }
    )


class Duration(click.ParamType):
    """Click parameter accepting ``10s``, ``5m``, ``1m30s`` or plain seconds."""

    name = "duration"

    def convert(self, value, param, ctx):
        if isinstance(value, (int, float)):
            return float(value)
        try:
            return parse_duration(value)
        except ValueError as exc:
            self.fail(str(exc), param, ctx)


def _build_config(**options) -> CheckConfig:
    try:
        return CheckConfig(**options)
    except ValidationError as exc:
        messages = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in exc.errors()
        )
        raise click.UsageError(f"Invalid configuration – {messages}")


@click.command(context_settings=CONTEXT_SETTINGS)
@click.option("--url", "base_url", default=DEFAULT_BASE_URL, envvar="SITECHECK_URL", help="Base URL to test.")
@click.option(
    "--content",
    "content_dir",
    default=DEFAULT_CONTENT_DIR,
    envvar="SITECHECK_CONTENT",
    type=click.Path(file_okay=False),
    help="Content directory.",
)
@click.option(
    "--workers",
    default=DEFAULT_WORKERS,
    envvar="SITECHECK_WORKERS",
    type=int,
    help="Max concurrent requests.",
)
@click.option(
    "--timeout",
    default="5m",
    envvar="SITECHECK_TIMEOUT",
    type=Duration(),
    help="Per-request timeout, e.g. 10s, 5m or 1m30s.",
)
@click.option(
    "--format",
    "output_format",
    default="text",
    type=click.Choice(["text", "json"]),
    help="Report format.",
)
@click.option("--list", "list_only", is_flag=True, help="Print the collected URLs and exit without checking.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging on stderr.")
@click.pass_context
def cli(
    ctx: click.Context,
    base_url: str,
    content_dir: str,
    workers: int,
    timeout: float,
    output_format: str,
    list_only: bool,
    verbose: bool,
) -> None:
    """Check that every URL declared by the content tree resolves with HTTP 200."""
    configure_logging("DEBUG" if verbose else "WARNING")
    config = _build_config(
        base_url=base_url, content_dir=content_dir, workers=workers, timeout=timeout
    )

    urls = collect_urls(config.content_dir)
    if list_only:
        for url in urls:
            click.echo(url)
        return

    text = output_format == "text"
    if text:
        render_header(config.base_url)
        render_collected(len(urls))

    logger.info("Checking %d URLs against %s", len(urls), config.base_url)
    results = asyncio.run(run_check(config, urls))
    report = summarize(config.base_url, results)

    if text:
        render_text(report)
    else:
        render_json(report)
    ctx.exit(exit_code(report))


if __name__ == "__main__":
    cli()
