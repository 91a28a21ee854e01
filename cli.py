"""Command-line entry point: parse flags, configure logging, run the reader until the feed is shown."""

from __future__ import annotations

import argparse
import logging
import os
from typing import List, Optional

from .config import load_config
from .display import ConsoleConsumer
from .ingest import FEEDS
from .orchestrator import ReaderPipeline


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="hnreader", description="Incremental Hacker News reader")
    p.add_argument("--feed", choices=FEEDS, default=None, help="Feed to read. Defaults to env HNREADER_FEED or top")
    p.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Number of items to materialize from the head of the feed. Defaults to env HNREADER_LIMIT or 11",
    )
    p.add_argument(
        "--interval",
        type=float,
        default=None,
        dest="fetch_interval",
        help="Seconds between item fetches. Defaults to env HNREADER_FETCH_INTERVAL or 0.5",
    )
    p.add_argument(
        "--timeout",
        type=float,
        default=None,
        dest="request_timeout",
        help="Per-request timeout in seconds. Defaults to env HNREADER_REQUEST_TIMEOUT or 10",
    )
    p.add_argument(
        "--max-attempts",
        type=int,
        default=None,
        help="Failures on one item before it is skipped with a placeholder; 0 retries forever",
    )
    p.add_argument("--base-url", default=None, help="Hacker News API root")
    p.add_argument("--no-details", action="store_true", help="Print titles only")
    p.add_argument(
        "--log-level",
        default=None,
        help="Log level (DEBUG/INFO/WARNING/ERROR). Defaults to env HNREADER_LOG_LEVEL or WARNING",
    )
    return p


def _resolve_log_level(value: Optional[str]) -> int:
    v = (value or "").strip().upper()
    if not v:
        return logging.WARNING
    level = logging.getLevelName(v)
    if isinstance(level, int):
        return level
    return logging.WARNING


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    log_level = _resolve_log_level(args.log_level or os.environ.get("HNREADER_LOG_LEVEL"))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logger = logging.getLogger("hnreader")

    try:
        config = load_config(
            feed=args.feed,
            limit=args.limit,
            fetch_interval=args.fetch_interval,
            request_timeout=args.request_timeout,
            max_attempts=args.max_attempts,
            base_url=args.base_url,
        )
    except ValueError as exc:
        logger.error("invalid configuration: %s", exc)
        return 2

    logger.info(
        "hnreader start: feed=%s limit=%d interval=%.2fs max_attempts=%d",
        config.feed,
        config.limit,
        config.fetch_interval,
        config.max_attempts,
    )

    pipeline = ReaderPipeline(config=config)
    consumer = ConsoleConsumer(show_details=not args.no_details)
    try:
        items = pipeline.start()
        shown = consumer.run(pipeline.channel)
    except KeyboardInterrupt:
        logger.info("interrupted; stopping updater")
        pipeline.stop()
        return 130

    pipeline.stop()
    report = pipeline.updater.report
    logger.info(
        "hnreader done: shown=%d fetched=%d failures=%d placeholders=%d reason=%s",
        shown,
        report.fetched,
        report.failures,
        report.placeholders,
        report.stopped_reason,
    )
    if items.limit == 0:
        logger.warning("no items to show; the identifier list was empty or could not be fetched")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
