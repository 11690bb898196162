"""Report option schemas."""

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from bundlescope.config import settings
from bundlescope.logging_config import get_logger
from bundlescope.services.analyzer import StatsAnalyzer


@dataclass(frozen=True)
class LiteralTitle:
    """Report title given as plain text."""

    text: str

    def resolve(self) -> str:
        return self.text


@dataclass(frozen=True)
class ComputedTitle:
    """Report title produced by a zero-argument callable at render time."""

    producer: Callable[[], str]

    def resolve(self) -> str:
        return self.producer()


ReportTitle = Union[LiteralTitle, ComputedTitle]


def _default_title() -> str:
    return f"Bundlescope [{datetime.now():%d %b %Y at %H:%M}]"


class ReportOptions(BaseModel):
    """Options shared by the live server and both report generators.

    Accepts snake_case names or their camelCase aliases (``openBrowser``,
    ``bundleDir``...). Defaults for host, port, browser opening and size metric
    come from ``bundlescope.config.settings``.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        arbitrary_types_allowed=True,
        extra="forbid",
    )

    port: int = Field(default_factory=lambda: settings.port, ge=0, le=65535)
    host: str = Field(default_factory=lambda: settings.host)
    open_browser: bool = Field(default_factory=lambda: settings.open_browser)
    bundle_dir: Optional[Path] = None
    logger: Any = Field(default_factory=lambda: get_logger("viewer"))
    default_sizes: Literal["stat", "parsed", "gzip", "brotli"] = Field(
        default_factory=lambda: settings.default_sizes
    )
    compression_algorithm: Optional[Literal["gzip", "brotli"]] = None
    exclude_assets: Any = None
    report_title: ReportTitle = Field(default_factory=lambda: ComputedTitle(_default_title))
    analyzer_url: Optional[Callable[..., str]] = None
    report_filename: Optional[str] = None
    bundle_stats: Any = None
    analyzer: Any = Field(default_factory=StatsAnalyzer)

    @field_validator("report_title", mode="before")
    @classmethod
    def coerce_report_title(cls, v: Any) -> ReportTitle:
        """Wrap plain strings and callables into their tagged title variants."""
        if isinstance(v, (LiteralTitle, ComputedTitle)):
            return v
        if isinstance(v, str):
            return LiteralTitle(v)
        if callable(v):
            return ComputedTitle(v)
        raise ValueError("report_title must be a string or a zero-argument callable")

    @field_validator("exclude_assets")
    @classmethod
    def validate_exclude_assets(cls, v: Any) -> Any:
        if v is None:
            return v
        patterns = v if isinstance(v, (list, tuple)) else [v]
        for pattern in patterns:
            if isinstance(pattern, str):
                try:
                    re.compile(pattern)
                except re.error as exc:
                    raise ValueError(f"Invalid exclude_assets pattern {pattern!r}: {exc}") from exc
            elif not (isinstance(pattern, re.Pattern) or callable(pattern)):
                raise ValueError(
                    "exclude_assets entries must be regex strings, compiled patterns or callables"
                )
        return v

    @field_validator("logger")
    @classmethod
    def validate_logger(cls, v: Any) -> Any:
        for method in ("info", "error", "debug"):
            if not callable(getattr(v, method, None)):
                raise ValueError(f"logger must provide a callable {method}()")
        return v

    @field_validator("analyzer")
    @classmethod
    def validate_analyzer(cls, v: Any) -> Any:
        if not callable(getattr(v, "get_viewer_data", None)):
            raise ValueError("analyzer must provide a get_viewer_data() method")
        return v

    @classmethod
    def coerce(cls, options: Any = None, **overrides: Any) -> "ReportOptions":
        """Build options from an existing instance, a mapping or nothing, plus overrides."""
        if isinstance(options, cls):
            if not overrides:
                return options
            data = {name: getattr(options, name) for name in cls.model_fields}
        else:
            data = dict(options or {})
        data.update(overrides)
        return cls.model_validate(data)

    def resolve_title(self) -> str:
        return self.report_title.resolve()
