from __future__ import annotations
import asyncio
import json
import logging
import sys
from typing import Any
import click
import uvicorn
from repo_briefing.domain.entities import BriefingRecord
from repo_briefing.domain.exceptions import RepoBriefingError
from repo_briefing.infrastructure.config import Settings, get_settings
from repo_briefing.interface.dependencies import (
    build_repo_fetcher,
    build_use_case,
    new_http_client,
)


def _configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    )


async def _run_once(settings: Settings, raw_input: dict[str, Any]) -> BriefingRecord:
    async with new_http_client() as client:
        use_case = build_use_case(settings, build_repo_fetcher(settings, client))
        return await use_case.execute(raw_input)


@click.group()
def cli() -> None:
    """Brief public GitHub repositories with an LLM."""
    _configure_logging(get_settings())


@cli.command()
@click.argument("input_file", type=click.File("r", encoding="utf-8"), default="-")
def run(input_file) -> None:  # type: ignore[no-untyped-def]
    """Run one briefing from a JSON input object (file or stdin)."""
    try:
        raw_input = json.load(input_file)
    except json.JSONDecodeError as exc:
        raise click.BadParameter(f"input is not valid JSON: {exc}") from exc
    if not isinstance(raw_input, dict):
        raise click.BadParameter("input must be a JSON object")

    try:
        record = asyncio.run(_run_once(get_settings(), raw_input))
    except RepoBriefingError as exc:
        click.echo(f"Error: {exc}", err=True)
        sys.exit(1)

    click.echo(json.dumps(record.to_dict(), indent=2, ensure_ascii=False))


@cli.command()
def serve() -> None:
    """Start the uvicorn ASGI server."""
    settings = get_settings()
    uvicorn.run(
        "repo_briefing.interface.app:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
