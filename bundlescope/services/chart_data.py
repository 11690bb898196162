"""Chart data pipeline shared by the live server and the report generators."""

import traceback
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional

from bundlescope.schemas.report import ReportOptions


class AnalysisFailure(str, Enum):
    """Ways an analyzer run can fail to produce chart data."""

    THROWN = "thrown"
    WRONG_SHAPE = "wrong_shape"


@dataclass(frozen=True)
class AnalysisResult:
    chart_data: Optional[List[Any]] = None
    failure: Optional[AnalysisFailure] = None
    error: Optional[BaseException] = None
    value: Any = None

    @property
    def ok(self) -> bool:
        return self.chart_data is not None


def _is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def run_analyzer(
    options: ReportOptions, bundle_stats: Any, bundle_dir: Optional[Path]
) -> AnalysisResult:
    """Invoke the analyzer and fold its two failure signals into one result."""
    try:
        value = options.analyzer.get_viewer_data(bundle_stats, bundle_dir, options)
    except Exception as exc:
        return AnalysisResult(failure=AnalysisFailure.THROWN, error=exc)

    if value is None:
        return AnalysisResult()
    if not _is_sequence(value):
        return AnalysisResult(failure=AnalysisFailure.WRONG_SHAPE, value=value)
    return AnalysisResult(chart_data=list(value))


def compute_chart_data(
    options: ReportOptions, bundle_stats: Any, bundle_dir: Optional[Path]
) -> Optional[List[Any]]:
    """Compute chart data, logging failures instead of raising them.

    Args:
        options: Report options (analyzer and logger are taken from here)
        bundle_stats: Decoded bundle stats
        bundle_dir: Directory holding the emitted bundles, if any

    Returns:
        Chart data list, or None when there is nothing to report
    """
    logger = options.logger
    result = run_analyzer(options, bundle_stats, bundle_dir)

    if result.failure is AnalysisFailure.THROWN:
        logger.error(f"Couldn't analyze bundle stats:\n{result.error}")
        logger.debug(
            "".join(
                traceback.format_exception(
                    type(result.error), result.error, result.error.__traceback__
                )
            )
        )
    elif result.failure is AnalysisFailure.WRONG_SHAPE:
        logger.error(
            "Couldn't find any javascript bundles: no bundles found in the provided stats file"
        )

    return result.chart_data
