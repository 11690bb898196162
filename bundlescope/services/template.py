"""Viewer page rendering."""

from typing import Any, List, Literal, Optional

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from bundlescope.config import PUBLIC_DIR, TEMPLATES_DIR
from bundlescope.schemas.report import ReportOptions

VIEWER_ASSETS = ("viewer.js", "viewer.css")

env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html", "xml", "j2"]),
)


def resolve_default_sizes(default_sizes: Optional[str], compression_algorithm: Optional[str]):
    """Map the compressed-size metrics onto the configured compression algorithm."""
    if default_sizes in ("gzip", "brotli"):
        return compression_algorithm
    return default_sizes


def _inline_asset(filename: str) -> Markup:
    content = (PUBLIC_DIR / filename).read_text(encoding="utf-8")
    # A literal closing tag would end the surrounding <script>/<style> element early.
    return Markup(content.replace("</script", "<\\/script").replace("</style", "<\\/style"))


def render_viewer(
    *,
    mode: Literal["server", "static"],
    title: str,
    chart_data: List[Any],
    entrypoints: List[str],
    default_sizes: Optional[str],
    compression_algorithm: Optional[str],
    enable_websocket: bool,
) -> str:
    """Render the viewer HTML page.

    In ``server`` mode the page links ``/viewer.js`` and ``/viewer.css`` from the
    static asset server; in ``static`` mode both are inlined so the file is
    self-contained.
    """
    template = env.get_template("viewer.html.j2")
    inline_assets = (
        {name: _inline_asset(name) for name in VIEWER_ASSETS} if mode == "static" else None
    )
    return template.render(
        mode=mode,
        title=title,
        chart_data=chart_data,
        entrypoints=entrypoints,
        default_sizes=default_sizes,
        compression_algorithm=compression_algorithm,
        enable_websocket=enable_websocket,
        inline_assets=inline_assets,
    )


def render_report_page(
    options: ReportOptions,
    chart_data: List[Any],
    entrypoints: List[str],
    *,
    mode: Literal["server", "static"],
) -> str:
    """Render the viewer page for ``options``; live updates are enabled only in server mode."""
    return render_viewer(
        mode=mode,
        title=options.resolve_title(),
        chart_data=chart_data,
        entrypoints=entrypoints,
        default_sizes=resolve_default_sizes(options.default_sizes, options.compression_algorithm),
        compression_algorithm=options.compression_algorithm,
        enable_websocket=mode == "server",
    )
