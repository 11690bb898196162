"""Bundle size reports: live viewer server plus static HTML and JSON snapshots."""

__version__ = "0.1.0"

from bundlescope.schemas.report import ComputedTitle, LiteralTitle, ReportOptions  # noqa: E402
from bundlescope.services.chart_data import compute_chart_data  # noqa: E402
from bundlescope.services.report_generator import (  # noqa: E402
    generate_json_report,
    generate_report,
)
from bundlescope.services.report_server import ReportServer, start, start_server  # noqa: E402
from bundlescope.utils.entrypoints import get_entrypoints  # noqa: E402

__all__ = [
    "ComputedTitle",
    "LiteralTitle",
    "ReportOptions",
    "ReportServer",
    "compute_chart_data",
    "generate_json_report",
    "generate_report",
    "get_entrypoints",
    "start",
    "start_server",
]
