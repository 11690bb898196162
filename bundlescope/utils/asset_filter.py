"""Asset exclusion filters."""

import re
from typing import Any, Callable, List


def _to_predicate(pattern: Any) -> Callable[[str], bool]:
    if isinstance(pattern, str):
        compiled = re.compile(pattern)
        return lambda name: compiled.search(name) is not None
    if isinstance(pattern, re.Pattern):
        return lambda name: pattern.search(name) is not None
    if callable(pattern):
        return pattern
    raise TypeError(
        "exclude_assets entries must be a regex string, a compiled pattern or a callable, "
        f"got {type(pattern).__name__}"
    )


def create_asset_filter(exclude: Any) -> Callable[[str], bool]:
    """Build a predicate that returns True for assets that should be kept.

    Args:
        exclude: None, a regex string, a compiled pattern, a callable taking the
            asset name, or a list of any of these

    Returns:
        Predicate over asset names

    Raises:
        TypeError: If an entry is of an unsupported type
    """
    if exclude is None:
        return lambda name: True

    patterns = exclude if isinstance(exclude, (list, tuple)) else [exclude]
    excluders: List[Callable[[str], bool]] = [_to_predicate(p) for p in patterns]

    def is_included(name: str) -> bool:
        return not any(excluder(name) for excluder in excluders)

    return is_included
