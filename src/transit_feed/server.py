import argparse
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path

from pydantic import BaseModel

from transit_feed.app import mcp
from transit_feed.data.feed_loader import FeedLoader
from transit_feed.errors import FeedError
from transit_feed.services.feed_service import summarize_feed

# Register tools on the shared MCP instance
from transit_feed.tools import feed_tools, route_tools  # noqa: F401


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str


@mcp.tool()
def health() -> HealthResponse:
    """Check if the transit feed MCP server is running and healthy.

    Returns the server status, version, and current timestamp.
    """
    from transit_feed import __version__

    return HealthResponse(
        status="ok",
        version=__version__,
        timestamp=datetime.now(UTC).isoformat(),
    )


def run_inspect(feed_path: Path, load_stop_times: bool, strict: bool) -> int:
    """Load a feed and print its summary. Returns the process exit code."""
    loader = FeedLoader(strict=strict)
    try:
        feed = loader.load(feed_path, load_stop_times=load_stop_times)
    except FeedError as e:
        print(f"Failed to load feed: {e}", file=sys.stderr)
        return 1

    summary = summarize_feed(feed)
    print("\nFeed loaded. Entity counts:")
    print(f"  routes: {summary.route_count:,}")
    print(f"  trips: {summary.trip_count:,}")
    print(f"  shapes: {summary.shape_count:,}")
    print(f"  stops: {summary.stop_count:,}")
    print(f"  services: {summary.service_count:,}")
    if feed.warnings:
        print(f"\n{len(feed.warnings):,} rows skipped or partially linked:")
        for warning in feed.warnings[:20]:
            print(f"  {warning.filename} row {warning.row_number}: {warning.message}")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(
        prog="transit-feed",
        description="Static GTFS feed MCP Server",
    )
    subparsers = parser.add_subparsers(dest="command")

    # inspect command
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Load a GTFS feed and print a summary",
    )
    inspect_parser.add_argument(
        "feed_path",
        type=Path,
        help="Path to GTFS directory or ZIP file",
    )
    inspect_parser.add_argument(
        "--no-stop-times",
        action="store_true",
        help="Skip stop_times.txt",
    )
    inspect_parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on rows that reference unknown routes, shapes, trips or stops",
    )
    inspect_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    if args.command == "inspect":
        # Configure logging
        log_level = logging.DEBUG if args.verbose else logging.INFO
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        )

        sys.exit(run_inspect(args.feed_path, not args.no_stop_times, args.strict))
    else:
        # Default: run MCP server
        mcp.run()


if __name__ == "__main__":
    main()
