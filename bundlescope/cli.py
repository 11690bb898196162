"""Command line entry point.

Usage: bundlescope <stats.json> [bundle_dir] [options]
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from bundlescope.config import COMPRESSION_ALGORITHMS, SIZE_METRICS, settings
from bundlescope.logging_config import get_logger, setup_logging
from bundlescope.schemas.report import ReportOptions
from bundlescope.services.chart_data import compute_chart_data
from bundlescope.services.report_generator import (
    DEFAULT_HTML_REPORT,
    DEFAULT_JSON_REPORT,
    generate_json_report,
    generate_report,
)
from bundlescope.services.report_server import start_server
from bundlescope.utils.browser import default_analyzer_url

LOG_LEVELS = {
    "debug": "DEBUG",
    "info": "INFO",
    "warn": "WARNING",
    "error": "ERROR",
    "silent": "CRITICAL",
}

logger = get_logger("cli")


def _port(value: str) -> int:
    if value == "auto":
        return 0
    try:
        port = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port: {value!r}")
    if not 0 <= port <= 65535:
        raise argparse.ArgumentTypeError(f"port out of range: {port}")
    return port


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bundlescope",
        description="Visualize the size of bundle output files and their modules.",
        add_help=False,
    )
    parser.add_argument("bundle_stats_file", help="Path to the bundler stats JSON file")
    parser.add_argument(
        "bundle_dir",
        nargs="?",
        help="Directory containing the emitted bundles (default: directory of the stats file)",
    )
    parser.add_argument(
        "-m",
        "--mode",
        choices=["server", "static", "json", "disabled"],
        default="server",
        help=(
            "server: live viewer; static: single HTML file; json: chart data as JSON; "
            "disabled: only check that the stats can be analyzed"
        ),
    )
    parser.add_argument("-h", "--host", default=settings.host, help="Host for the viewer server")
    parser.add_argument(
        "-p", "--port", type=_port, default=settings.port, help='Port for the viewer server ("auto" picks a free one)'
    )
    parser.add_argument("-r", "--report", help="Report file name (static and json modes)")
    parser.add_argument("-t", "--title", help="Report title")
    parser.add_argument(
        "-s",
        "--default-sizes",
        choices=SIZE_METRICS,
        default=settings.default_sizes,
        help="Size metric shown by default",
    )
    parser.add_argument(
        "--compression-algorithm",
        choices=COMPRESSION_ALGORITHMS,
        default=None,
        help="Compression algorithm used for compressed sizes",
    )
    parser.add_argument(
        "-O",
        "--no-open",
        dest="open_browser",
        action="store_false",
        default=settings.open_browser,
        help="Don't open the report in the default browser",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        action="append",
        default=None,
        help="Regex of assets to leave out of the report (repeatable)",
    )
    parser.add_argument(
        "-l",
        "--log-level",
        choices=list(LOG_LEVELS),
        default=None,
        help="Log level (default from BUNDLESCOPE_LOG_LEVEL)",
    )
    parser.add_argument("--help", action="help", help="Show this help message and exit")
    return parser


def load_bundle_stats(path: Path) -> Any:
    with path.open(encoding="utf-8") as stats_file:
        return json.load(stats_file)


def build_options(args: argparse.Namespace) -> ReportOptions:
    bundle_dir = args.bundle_dir or str(Path(args.bundle_stats_file).resolve().parent)
    report_filename = args.report
    if report_filename is None and args.mode == "static":
        report_filename = DEFAULT_HTML_REPORT
    elif report_filename is None and args.mode == "json":
        report_filename = DEFAULT_JSON_REPORT

    values: Dict[str, Any] = {
        "host": args.host,
        "port": args.port,
        "open_browser": args.open_browser,
        "bundle_dir": bundle_dir,
        "default_sizes": args.default_sizes,
        "compression_algorithm": args.compression_algorithm,
        "exclude_assets": args.exclude,
        "report_filename": report_filename,
        "analyzer_url": default_analyzer_url,
        "logger": get_logger("viewer"),
    }
    if args.title:
        values["report_title"] = args.title
    return ReportOptions(**values)


async def _serve(bundle_stats: Any, options: ReportOptions) -> None:
    server = await start_server(bundle_stats, options)
    if server is None:
        return
    await server.wait_closed()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(LOG_LEVELS[args.log_level] if args.log_level else None)

    stats_path = Path(args.bundle_stats_file)
    try:
        bundle_stats = load_bundle_stats(stats_path)
    except (OSError, ValueError) as exc:
        logger.error(f"Couldn't read bundle stats from {stats_path}:\n{exc}")
        logger.debug("Stats file load failed", exc_info=True)
        return 1

    options = build_options(args)

    if args.mode == "server":
        try:
            asyncio.run(_serve(bundle_stats, options))
        except KeyboardInterrupt:
            logger.info("Viewer server stopped")
    elif args.mode == "static":
        asyncio.run(generate_report(bundle_stats, options))
    elif args.mode == "json":
        asyncio.run(generate_json_report(bundle_stats, options))
    elif compute_chart_data(options, bundle_stats, options.bundle_dir) is not None:
        logger.info("Bundle stats analyzed; report generation is disabled")
    return 0


if __name__ == "__main__":
    sys.exit(main())
