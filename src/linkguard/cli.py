"""CLI entry point for LinkGuard."""

from __future__ import annotations

import argparse
import json
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from linkguard import __version__
from linkguard.config import RuleTables, load_config
from linkguard.engine import HeuristicEngine
from linkguard.history import DEFAULT_MAX_ITEMS, HistoryStore
from linkguard.normalizer import MalformedURL
from linkguard.scanner import scan_url

console = Console()
err_console = Console(stderr=True)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="linkguard",
        description="LinkGuard - heuristic URL trust scoring",
    )
    parser.add_argument("urls", metavar="URL", nargs="*", help="URL(s) to analyze")
    parser.add_argument(
        "-c", "--config",
        default=None,
        help="Path to an override config YAML file",
    )
    parser.add_argument(
        "--samples",
        action="store_true",
        help="Scan the sample URLs listed in the config",
    )
    parser.add_argument(
        "--no-ai",
        action="store_true",
        help="Skip the AI advisory and report local heuristics only",
    )
    parser.add_argument(
        "--history",
        default=None,
        metavar="FILE",
        help="Record scans in this JSON history file",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Parse CLI arguments, scan each URL and print the results as JSON.

    Returns:
        Exit status: 0 on success, 1 on config errors, 2 if any URL was
        malformed.
    """
    parser = _build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
    )

    try:
        config = load_config(args.config)
    except Exception as e:
        err_console.print(f"Error loading config: {escape(str(e))}")
        return 1

    urls = list(args.urls)
    if args.samples:
        urls.extend(sample["url"] for sample in config.get("samples", []))
    if not urls:
        parser.error("no URL given (pass one or more URLs, or --samples)")

    history_cfg = config.get("history", {})
    history_path = args.history or history_cfg.get("path") or None
    history = None
    if history_path:
        history = HistoryStore(
            max_items=history_cfg.get("max_items", DEFAULT_MAX_ITEMS), path=history_path,
        )
        history.load()

    engine = HeuristicEngine(RuleTables.from_config(config))
    exit_code = 0
    for url in urls:
        try:
            result = scan_url(
                url, config, engine=engine, with_advisory=not args.no_ai, history=history,
            )
        except MalformedURL as exc:
            err_console.print(f"[red]{escape(repr(url))}: {escape(str(exc))}[/red]")
            exit_code = 2
            continue
        console.print_json(json.dumps(result.to_dict(), ensure_ascii=False))

    if history is not None:
        history.save()

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
