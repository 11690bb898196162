"""Tests for report options and their resolution helpers."""

import logging
import re
from pathlib import Path

import pytest
from pydantic import ValidationError

from bundlescope.config import settings
from bundlescope.schemas.report import ComputedTitle, LiteralTitle, ReportOptions
from bundlescope.services.analyzer import StatsAnalyzer
from bundlescope.services.template import resolve_default_sizes


def test_defaults():
    options = ReportOptions()
    assert options.port == settings.port == 8888
    assert options.host == "127.0.0.1"
    assert options.bundle_dir is None
    assert options.default_sizes == "parsed"
    assert options.compression_algorithm is None
    assert options.exclude_assets is None
    assert options.analyzer_url is None
    assert options.report_filename is None
    assert isinstance(options.logger, logging.Logger)
    assert isinstance(options.analyzer, StatsAnalyzer)
    assert isinstance(options.report_title, ComputedTitle)
    assert options.resolve_title().startswith("Bundlescope [")


def test_camel_case_aliases_are_accepted():
    options = ReportOptions.model_validate(
        {
            "openBrowser": False,
            "bundleDir": "dist",
            "defaultSizes": "gzip",
            "compressionAlgorithm": "brotli",
            "reportFilename": "out/report.html",
            "reportTitle": "My bundle",
        }
    )
    assert options.open_browser is False
    assert options.bundle_dir == Path("dist")
    assert options.default_sizes == "gzip"
    assert options.compression_algorithm == "brotli"
    assert options.report_filename == "out/report.html"
    assert options.resolve_title() == "My bundle"


def test_unknown_options_are_rejected():
    with pytest.raises(ValidationError):
        ReportOptions(colour="blue")


def test_invalid_metric_and_port_are_rejected():
    with pytest.raises(ValidationError):
        ReportOptions(default_sizes="minified")
    with pytest.raises(ValidationError):
        ReportOptions(compression_algorithm="zip")
    with pytest.raises(ValidationError):
        ReportOptions(port=70000)


def test_literal_title():
    options = ReportOptions(report_title="Static title")
    assert options.report_title == LiteralTitle("Static title")
    assert options.resolve_title() == "Static title"


def test_computed_title_is_called_on_each_resolution():
    calls = []

    def producer():
        calls.append(1)
        return f"Build #{len(calls)}"

    options = ReportOptions(report_title=producer)
    assert isinstance(options.report_title, ComputedTitle)
    assert options.resolve_title() == "Build #1"
    assert options.resolve_title() == "Build #2"


def test_bad_title_is_rejected():
    with pytest.raises(ValidationError):
        ReportOptions(report_title=42)


def test_exclude_assets_validation():
    assert ReportOptions(exclude_assets="vendor").exclude_assets == "vendor"
    pattern = re.compile(r"\.map$")
    assert ReportOptions(exclude_assets=[pattern, "x"]).exclude_assets == [pattern, "x"]
    with pytest.raises(ValidationError):
        ReportOptions(exclude_assets="(unclosed")
    with pytest.raises(ValidationError):
        ReportOptions(exclude_assets=[42])


def test_analyzer_must_expose_get_viewer_data():
    with pytest.raises(ValidationError):
        ReportOptions(analyzer=object())


def test_logger_accepts_adapters_and_rejects_objects_without_log_methods():
    adapter = logging.LoggerAdapter(logging.getLogger("tests.viewer"), {"build": "nightly"})

    assert ReportOptions(logger=adapter).logger is adapter
    with pytest.raises(ValidationError):
        ReportOptions(logger=object())


def test_coerce_accepts_instances_mappings_and_overrides():
    base = ReportOptions(port=9000, report_title="Base")
    assert ReportOptions.coerce(base) is base

    updated = ReportOptions.coerce(base, port=9001)
    assert updated.port == 9001
    assert updated.resolve_title() == "Base"
    assert base.port == 9000

    from_mapping = ReportOptions.coerce({"reportFilename": "r.json"}, open_browser=False)
    assert from_mapping.report_filename == "r.json"
    assert from_mapping.open_browser is False

    assert isinstance(ReportOptions.coerce(None), ReportOptions)


@pytest.mark.parametrize(
    ("default_sizes", "compression_algorithm", "expected"),
    [
        ("gzip", "brotli", "brotli"),
        ("brotli", "gzip", "gzip"),
        ("parsed", "brotli", "parsed"),
        ("stat", None, "stat"),
        ("brotli", None, None),
    ],
)
def test_resolve_default_sizes(default_sizes, compression_algorithm, expected):
    assert resolve_default_sizes(default_sizes, compression_algorithm) == expected
