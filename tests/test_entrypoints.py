"""Tests for entrypoint extraction."""

from bundlescope.utils.entrypoints import get_entrypoints


def test_missing_stats_have_no_entrypoints():
    assert get_entrypoints(None) == []
    assert get_entrypoints({}) == []
    assert get_entrypoints({"entrypoints": None}) == []
    assert get_entrypoints({"entrypoints": {}}) == []


def test_entrypoint_names_follow_mapping_order():
    stats = {"entrypoints": {"a": {"name": "x"}, "b": {"name": "y"}}}
    assert get_entrypoints(stats) == ["x", "y"]


def test_names_are_taken_from_records_not_keys():
    stats = {"entrypoints": {"zeta": {"name": "app", "assets": ["app.js"]}, "alpha": {"name": "admin"}}}
    assert get_entrypoints(stats) == ["app", "admin"]


def test_non_mapping_stats_are_ignored():
    assert get_entrypoints(["main"]) == []
    assert get_entrypoints("main") == []
