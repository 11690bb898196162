"""FastAPI application serving the live viewer."""

from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, WebSocket
from fastapi.responses import HTMLResponse

from bundlescope import __version__
from bundlescope.config import PUBLIC_DIR
from bundlescope.utils.static_files import NoCacheStaticFiles

if TYPE_CHECKING:
    from bundlescope.services.report_server import ReportServer


def create_app(report_server: "ReportServer") -> FastAPI:
    """Build the viewer app bound to one report server's state."""
    app = FastAPI(
        title="Bundlescope",
        description="Interactive bundle size viewer",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.report_server = report_server

    @app.get("/", response_class=HTMLResponse)
    async def viewer_page(request: Request) -> HTMLResponse:
        """Viewer page embedding the current chart data."""
        return HTMLResponse(request.app.state.report_server.render_page())

    # Live updates are accepted on any path, like a server-wide upgrade handler.
    @app.websocket("/{path:path}")
    async def push_channel(websocket: WebSocket, path: str) -> None:
        await websocket.app.state.report_server.ws.handle(websocket)

    # Everything else is a front-end asset; mounted last so the routes above win.
    app.mount("/", NoCacheStaticFiles(directory=str(PUBLIC_DIR)), name="public")

    return app
