"""Pydantic schemas package."""

from bundlescope.schemas.report import ComputedTitle, LiteralTitle, ReportOptions, ReportTitle

__all__ = ["ComputedTitle", "LiteralTitle", "ReportOptions", "ReportTitle"]
