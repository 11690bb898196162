"""Tests for the default stats analyzer and asset filters."""

import gzip
import re
from types import SimpleNamespace

import pytest

from bundlescope.services.analyzer import StatsAnalyzer
from bundlescope.utils.asset_filter import create_asset_filter


def build_options(**overrides):
    base = {"exclude_assets": None, "compression_algorithm": None}
    base.update(overrides)
    return SimpleNamespace(**base)


def sample_stats():
    return {
        "entrypoints": {
            "main": {"name": "main", "assets": [{"name": "main.js"}]},
            "admin": {"name": "admin", "assets": ["admin.js"]},
        },
        "assets": [
            {"name": "main.js", "chunks": [0]},
            {"name": "admin.js", "chunks": [1]},
            {"name": "main.css", "chunks": [0]},
            {"name": "main.js.map", "chunks": [0]},
        ],
        "modules": [
            {"id": 1, "name": "./src/index.js", "size": 100, "chunks": [0]},
            {"id": 2, "name": "./src/utils/format.js", "size": 40, "chunks": [0, 1]},
            {"id": 3, "name": "./node_modules/lib/index.js", "size": 300, "chunks": [1]},
        ],
    }


def test_one_entry_per_javascript_asset():
    chart_data = StatsAnalyzer().get_viewer_data(sample_stats(), None, build_options())

    assert [entry["label"] for entry in chart_data] == ["main.js", "admin.js"]
    main, admin = chart_data
    assert main["isAsset"] is True
    assert main["statSize"] == 140
    assert admin["statSize"] == 340
    assert main["isInitialByEntrypoint"] == {"main": True, "admin": False}
    assert admin["isInitialByEntrypoint"] == {"main": False, "admin": True}
    assert "parsedSize" not in main


def test_modules_are_grouped_into_folders():
    main = StatsAnalyzer().get_viewer_data(sample_stats(), None, build_options())[0]

    (src,) = main["groups"]
    assert src["label"] == "src"
    assert src["path"] == "./src"
    assert src["statSize"] == 140
    labels = sorted(group["label"] for group in src["groups"])
    assert labels == ["index.js", "utils"]
    utils = next(group for group in src["groups"] if group["label"] == "utils")
    assert utils["groups"] == [
        {"id": 2, "label": "format.js", "path": "./src/utils/format.js", "statSize": 40}
    ]


def test_loader_prefixes_are_stripped_from_module_paths():
    stats = {
        "assets": [{"name": "app.js", "chunks": [0]}],
        "modules": [{"id": 7, "name": "babel-loader!./src/app.js?cache", "size": 10, "chunks": [0]}],
    }
    (app,) = StatsAnalyzer().get_viewer_data(stats, None, build_options())
    assert app["groups"][0]["label"] == "src"
    assert app["groups"][0]["groups"][0]["path"] == "./src/app.js"


def test_chunk_modules_are_used_when_top_level_modules_missing():
    stats = {
        "assets": [{"name": "app.js", "chunks": ["app"]}],
        "chunks": [{"id": "app", "modules": [{"id": 1, "name": "./a.js", "size": 12}]}],
    }
    (app,) = StatsAnalyzer().get_viewer_data(stats, None, build_options())
    assert app["statSize"] == 12


def test_first_child_compilation_is_used():
    stats = {"children": [sample_stats()]}
    chart_data = StatsAnalyzer().get_viewer_data(stats, None, build_options())
    assert len(chart_data) == 2


def test_parsed_and_gzip_sizes_read_from_bundle_dir(tmp_path):
    source = b"console.log('hello');" * 20
    (tmp_path / "main.js").write_bytes(source)

    chart_data = StatsAnalyzer().get_viewer_data(
        sample_stats(), tmp_path, build_options(compression_algorithm="gzip")
    )

    main, admin = chart_data
    assert main["parsedSize"] == len(source)
    assert main["gzipSize"] == len(gzip.compress(source))
    assert "parsedSize" not in admin


def test_excluded_assets_are_left_out():
    chart_data = StatsAnalyzer().get_viewer_data(
        sample_stats(), None, build_options(exclude_assets="admin")
    )
    assert [entry["label"] for entry in chart_data] == ["main.js"]


def test_no_javascript_assets_returns_empty_mapping():
    stats = {"assets": [{"name": "styles.css", "chunks": [0]}], "modules": []}
    assert StatsAnalyzer().get_viewer_data(stats, None, build_options()) == {}


def test_non_mapping_stats_raise():
    with pytest.raises(TypeError):
        StatsAnalyzer().get_viewer_data(None, None, build_options())


def test_asset_filter_variants():
    assert create_asset_filter(None)("anything.js")

    by_string = create_asset_filter("vendor")
    assert not by_string("vendor.js")
    assert by_string("main.js")

    by_pattern = create_asset_filter(re.compile(r"^admin"))
    assert not by_pattern("admin.js")
    assert by_pattern("main-admin.js")

    by_callable = create_asset_filter(lambda name: name.endswith(".mjs"))
    assert not by_callable("worker.mjs")

    combined = create_asset_filter(["vendor", re.compile(r"\.map$")])
    assert not combined("vendor.js")
    assert not combined("main.js.map")
    assert combined("main.js")


def test_asset_filter_rejects_unknown_types():
    with pytest.raises(TypeError):
        create_asset_filter([42])
