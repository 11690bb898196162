"""Entrypoint extraction from bundle stats."""

from collections.abc import Mapping
from typing import Any, List


def get_entrypoints(bundle_stats: Any) -> List[str]:
    """Return entrypoint names in the order the stats list them.

    Args:
        bundle_stats: Decoded stats mapping (may be None)

    Returns:
        List of entrypoint names; empty when the stats carry no entrypoints
    """
    if not isinstance(bundle_stats, Mapping):
        return []
    entrypoints = bundle_stats.get("entrypoints")
    if not isinstance(entrypoints, Mapping) or not entrypoints:
        return []
    return [entrypoint.get("name") for entrypoint in entrypoints.values()]
