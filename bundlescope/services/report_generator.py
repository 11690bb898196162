"""One-shot report generators (static HTML and JSON)."""

import json
from pathlib import Path
from typing import Any, Optional

import aiofiles

from bundlescope.schemas.report import ReportOptions
from bundlescope.services.chart_data import compute_chart_data
from bundlescope.services.template import render_report_page
from bundlescope.utils.browser import open_browser
from bundlescope.utils.entrypoints import get_entrypoints

DEFAULT_HTML_REPORT = "report.html"
DEFAULT_JSON_REPORT = "report.json"


async def generate_report(bundle_stats: Any, options: Any = None, **overrides: Any) -> Optional[Path]:
    """Write a self-contained HTML report.

    The file lands at ``bundle_dir / report_filename`` (``bundle_dir`` defaults
    to the working directory) and replaces any existing file there.

    Args:
        bundle_stats: Decoded bundle stats (falls back to ``options.bundle_stats``)
        options: ReportOptions or a mapping of option names
        **overrides: Individual options taking precedence over ``options``

    Returns:
        Absolute path of the written report, or None when there was nothing to report

    Raises:
        OSError: If the directory or file cannot be written
    """
    options = ReportOptions.coerce(options, **overrides)
    if bundle_stats is None:
        bundle_stats = options.bundle_stats
    logger = options.logger

    chart_data = compute_chart_data(options, bundle_stats, options.bundle_dir)
    if chart_data is None:
        return None

    report_html = render_report_page(
        options, chart_data, get_entrypoints(bundle_stats), mode="static"
    )
    base_dir = Path(options.bundle_dir) if options.bundle_dir else Path.cwd()
    report_filepath = (base_dir / (options.report_filename or DEFAULT_HTML_REPORT)).resolve()

    report_filepath.parent.mkdir(parents=True, exist_ok=True)
    report_filepath.write_text(report_html, encoding="utf-8")

    logger.info(f"Bundlescope saved report to {report_filepath}")

    if options.open_browser:
        open_browser(report_filepath.as_uri(), logger)

    return report_filepath


async def generate_json_report(
    bundle_stats: Any, options: Any = None, **overrides: Any
) -> Optional[Path]:
    """Write the chart data alone as JSON to ``report_filename``.

    Unlike the HTML report, the path is taken relative to the process working
    directory, not ``bundle_dir``.

    Returns:
        Path of the written report, or None when there was nothing to report

    Raises:
        TypeError: If the chart data is not JSON serializable; an existing report is left untouched
        OSError: If the directory or file cannot be written
    """
    options = ReportOptions.coerce(options, **overrides)
    if bundle_stats is None:
        bundle_stats = options.bundle_stats

    chart_data = compute_chart_data(options, bundle_stats, options.bundle_dir)
    if chart_data is None:
        return None

    report_json = json.dumps(chart_data)
    report_filename = Path(options.report_filename or DEFAULT_JSON_REPORT)
    report_filename.parent.mkdir(parents=True, exist_ok=True)
    async with aiofiles.open(report_filename, "w", encoding="utf-8") as report_file:
        await report_file.write(report_json)

    options.logger.info(f"Bundlescope saved JSON report to {report_filename}")
    return report_filename
