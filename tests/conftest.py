"""Shared fixtures for bundlescope tests."""

import json
import logging
import re
from typing import Any, List

import pytest

from bundlescope.schemas.report import ReportOptions
from bundlescope.utils.browser import default_analyzer_url


class StubAnalyzer:
    """Analyzer double returning a fixed value or raising a fixed error."""

    def __init__(self, result: Any = None, error: BaseException | None = None):
        self.result = result
        self.error = error
        self.calls: List[tuple] = []

    def get_viewer_data(self, bundle_stats, bundle_dir, options):
        self.calls.append((bundle_stats, bundle_dir, options))
        if self.error is not None:
            raise self.error
        return self.result


SAMPLE_STATS = {"entrypoints": {"main": {"name": "main"}}}
SAMPLE_CHART_DATA = [{"label": "main.js", "statSize": 100}]


def embedded(html: str, name: str):
    """Decode a value the viewer page assigns to window.<name>."""
    match = re.search(rf"window\.{name} = (.*);", html)
    assert match, f"window.{name} not embedded"
    return json.loads(match.group(1))


@pytest.fixture
def test_logger() -> logging.Logger:
    logger = logging.getLogger("tests.viewer")
    logger.setLevel(logging.DEBUG)
    return logger


@pytest.fixture
def make_options(test_logger):
    """Build ReportOptions with a stub analyzer and no browser launching."""

    def _make(result: Any = SAMPLE_CHART_DATA, error: BaseException | None = None, **overrides):
        values = {
            "open_browser": False,
            "logger": test_logger,
            "analyzer": StubAnalyzer(result=result, error=error),
            "analyzer_url": default_analyzer_url,
            "report_title": "Test report",
        }
        values.update(overrides)
        return ReportOptions(**values)

    return _make
