"""
Reddit thing client - command line entry point.

    reddit-things hours r/gaming --amount 500
    reddit-things thing t3_abc123
"""
import asyncio
import json
from typing import Any, Optional

import click

from src.config import Settings
from src.reddit import RedditAPIError, RedditClient
from src.stats.hour_freqs import format_hour_histogram, hour_frequencies
from src.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


async def run_hours(settings: Settings, path: str, amount: int) -> str:
    async with RedditClient(settings=settings) as client:
        freqs = await hour_frequencies(client.paginate(path), amount)
    return format_hour_histogram(freqs)


async def run_thing(settings: Settings, thing_id: str) -> Any:
    async with RedditClient(settings=settings) as client:
        return await client.fetch_by_id(thing_id)


def _plain(value: Any) -> Any:
    to_plain = getattr(value, "to_dict", None) or getattr(value, "to_list", None)
    return to_plain() if to_plain else value


@click.group()
@click.option("--log-level", default=None, help="Override LOG_LEVEL")
@click.pass_context
def cli(ctx: click.Context, log_level: Optional[str]) -> None:
    """Read Reddit listings through the rate-limited JSON API."""
    settings = Settings.from_env()
    if log_level:
        settings = settings.model_copy(update={"log_level": log_level.upper()})
    setup_logging(level=settings.log_level)
    logger.info("cli_starting", base_url=settings.base_url, log_level=settings.log_level)
    ctx.obj = settings


@cli.command()
@click.argument("path")
@click.option("--amount", "-n", default=100, show_default=True, help="Items to sample")
@click.pass_obj
def hours(settings: Settings, path: str, amount: int) -> None:
    """Histogram of the posting hour of the first AMOUNT items at PATH."""
    try:
        histogram = asyncio.run(run_hours(settings, path, amount))
    except RedditAPIError as e:
        raise click.ClickException(str(e)) from e
    click.echo(histogram)


@cli.command()
@click.argument("thing_id")
@click.pass_obj
def thing(settings: Settings, thing_id: str) -> None:
    """Print the thing with fullname THING_ID as JSON."""
    try:
        result = asyncio.run(run_thing(settings, thing_id))
    except RedditAPIError as e:
        raise click.ClickException(str(e)) from e
    click.echo(json.dumps(_plain(result), indent=2, default=str))


if __name__ == "__main__":
    cli()
