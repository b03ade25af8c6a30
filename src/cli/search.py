"""Run event searches from the command line.

Usage::

    # One search, JSON to stdout
    python -m src.cli.search --location "Dallas, TX" --interest theatre --date 2026-01-06

    # Read the request body from a file and write the response to another
    python -m src.cli.search --input input.json --output output.json

    # Fetch three pages of the same query (the cache accumulates them)
    python -m src.cli.search --location "Austin TX" --interest music --pages 3

Needs ``SEATGEEK_CLIENT_ID``; snippets use an LLM when ``ANTHROPIC_API_KEY``
or ``OPENAI_API_KEY`` is set and the fallback text otherwise.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

import httpx
from pydantic import ValidationError

from src.api.schemas import EventSearchResponse
from src.config.settings import Settings
from src.models.query import EventQuery
from src.pipeline.event_pipeline import EventSearchPipeline, EventSearchResult
from src.utils.errors import ConfigurationError


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m src.cli.search",
        description="Search SeatGeek events and print merged, enriched results as JSON.",
    )
    parser.add_argument("--input", type=Path, help="JSON file with {location, interests, date}.")
    parser.add_argument("--location", default=None, help="'City, ST' or 'City ST'.")
    parser.add_argument(
        "--interest",
        dest="interests",
        action="append",
        default=None,
        help="Interest keyword; repeat for several.",
    )
    parser.add_argument("--date", default=None, help="YYYY-MM-DD")
    parser.add_argument("--pages", type=int, default=1, help="Pages to fetch (default 1).")
    parser.add_argument("--output", type=Path, help="Write JSON here instead of stdout.")
    return parser


def _load_query(args: argparse.Namespace) -> EventQuery:
    data: dict = {}
    if args.input:
        data = json.loads(args.input.read_text(encoding="utf-8"))
    if args.location is not None:
        data["location"] = args.location
    if args.interests is not None:
        data["interests"] = args.interests
    if args.date is not None:
        data["date"] = args.date
    return EventQuery.model_validate(data)


def _to_json(result: EventSearchResult) -> str:
    response = EventSearchResponse(
        items=result.items,
        descriptions=result.descriptions,
        debug=result.debug,
    )
    return json.dumps(response.model_dump(mode="json", by_alias=True), indent=2)


async def _run(query: EventQuery, pages: int, settings: Settings) -> EventSearchResult:
    from src.main import build_pipeline

    async with httpx.AsyncClient(timeout=settings.upstream_timeout_seconds) as client:
        components = build_pipeline(settings, client)
        pipeline: EventSearchPipeline = components["pipeline"]

        result = await pipeline.search(query)
        for page in range(2, pages + 1):
            if result.done:
                print(f"  upstream exhausted after page {page - 1}", file=sys.stderr)
                break
            result = await pipeline.search(query)
        return result


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)

    try:
        query = _load_query(args)
    except (OSError, json.JSONDecodeError, ValidationError) as exc:
        print(f"Error: invalid request: {exc}", file=sys.stderr)
        return 2

    try:
        result = asyncio.run(_run(query, max(1, args.pages), Settings()))
    except ConfigurationError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        return 1

    output = _to_json(result)
    if args.output:
        args.output.write_text(output + "\n", encoding="utf-8")
        print(f"Saved {len(result.items)} events to {args.output}", file=sys.stderr)
    else:
        print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
