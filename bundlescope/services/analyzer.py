"""Stats-based bundle analyzer.

Turns decoded bundler stats into the chart data the viewer draws:
- one entry per JavaScript asset, with its stat size and, when the bundle
  directory holds the emitted file, parsed and gzip sizes
- a folder tree of the modules that went into each asset

Any object with a ``get_viewer_data(bundle_stats, bundle_dir, options)`` method
can replace it via ``ReportOptions.analyzer``.
"""

import gzip
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

from bundlescope.utils.asset_filter import create_asset_filter

JS_EXTENSIONS = (".js", ".mjs", ".cjs")


class Analyzer(Protocol):
    """Collaborator computing chart data from bundle stats."""

    def get_viewer_data(self, bundle_stats: Any, bundle_dir: Optional[Path], options: Any) -> Any:
        ...


class StatsAnalyzer:
    """Default analyzer working from the stats file (and emitted bundles if present)."""

    def get_viewer_data(
        self, bundle_stats: Any, bundle_dir: Optional[Path], options: Any
    ) -> List[Dict[str, Any]] | Dict[str, Any]:
        """Compute chart data for every JavaScript asset in the stats.

        Args:
            bundle_stats: Decoded stats mapping
            bundle_dir: Directory holding the emitted bundles, if known
            options: ReportOptions (``exclude_assets`` and ``compression_algorithm`` are read)

        Returns:
            List of asset entries, or an empty mapping when the stats describe no
            JavaScript bundles

        Raises:
            TypeError: If the stats are not a mapping
        """
        if not isinstance(bundle_stats, Mapping):
            raise TypeError(f"Bundle stats must be a mapping, got {type(bundle_stats).__name__}")

        if not bundle_stats.get("assets") and bundle_stats.get("children"):
            bundle_stats = bundle_stats["children"][0]

        is_asset_included = create_asset_filter(getattr(options, "exclude_assets", None))
        compression_algorithm = getattr(options, "compression_algorithm", None)

        assets = [
            asset
            for asset in bundle_stats.get("assets") or []
            if _asset_name(asset).endswith(JS_EXTENSIONS) and is_asset_included(_asset_name(asset))
        ]
        if not assets:
            return {}

        modules = _flatten_modules(bundle_stats)
        entrypoints = bundle_stats.get("entrypoints") or {}

        chart_data = []
        for asset in assets:
            name = _asset_name(asset)
            chunk_ids = set(asset.get("chunks") or [])
            asset_modules = [m for m in modules if chunk_ids & set(m.get("chunks") or [])]
            groups = _build_tree(asset_modules)

            entry: Dict[str, Any] = {
                "label": name,
                "isAsset": True,
                "statSize": sum(_module_size(m) for m in asset_modules),
                "isInitialByEntrypoint": {
                    entrypoint.get("name", key): name in _entrypoint_assets(entrypoint)
                    for key, entrypoint in entrypoints.items()
                },
                "groups": groups,
            }

            source = _read_bundle(bundle_dir, name)
            if source is not None:
                entry["parsedSize"] = len(source)
                if compression_algorithm == "gzip":
                    entry["gzipSize"] = len(gzip.compress(source))

            chart_data.append(entry)

        return chart_data


def _asset_name(asset: Any) -> str:
    if isinstance(asset, Mapping):
        return str(asset.get("name", ""))
    return str(asset)


def _module_size(module: Mapping) -> int:
    return int(module.get("size") or 0)


def _entrypoint_assets(entrypoint: Mapping) -> List[str]:
    names = []
    for asset in entrypoint.get("assets") or []:
        names.append(_asset_name(asset))
    return names


def _flatten_modules(bundle_stats: Mapping) -> List[Mapping]:
    """Collect modules, falling back to per-chunk module lists."""
    modules = list(bundle_stats.get("modules") or [])
    if modules:
        return modules
    for chunk in bundle_stats.get("chunks") or []:
        for module in chunk.get("modules") or []:
            merged = dict(module)
            merged.setdefault("chunks", [chunk.get("id")])
            modules.append(merged)
    return modules


def _read_bundle(bundle_dir: Optional[Path], name: str) -> Optional[bytes]:
    if bundle_dir is None:
        return None
    path = Path(bundle_dir) / name
    if not path.is_file():
        return None
    return path.read_bytes()


def _split_module_path(name: str) -> List[str]:
    # Loader prefixes ("babel-loader!./src/a.js") do not belong to the folder tree.
    name = name.split("!")[-1].split("?")[0]
    parts = [part for part in name.replace("\\", "/").split("/") if part not in ("", ".")]
    return parts or [name]


def _build_tree(modules: List[Mapping]) -> List[Dict[str, Any]]:
    root: Dict[str, Any] = {"groups": {}}

    for module in modules:
        name = str(module.get("name") or module.get("identifier") or module.get("id"))
        parts = _split_module_path(name)
        size = _module_size(module)

        node = root
        path = "."
        for folder in parts[:-1]:
            path = f"{path}/{folder}"
            node = node["groups"].setdefault(
                folder, {"label": folder, "path": path, "statSize": 0, "groups": {}}
            )
            node["statSize"] += size

        node["groups"][parts[-1]] = {
            "id": module.get("id"),
            "label": parts[-1],
            "path": f"{path}/{parts[-1]}",
            "statSize": size,
        }

    return _freeze_groups(root["groups"])


def _freeze_groups(groups: Dict[str, Dict[str, Any]]) -> List[Dict[str, Any]]:
    frozen = []
    for node in groups.values():
        if "groups" in node:
            node = dict(node, groups=_freeze_groups(node["groups"]))
        frozen.append(node)
    return frozen
