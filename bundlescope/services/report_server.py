"""Long-lived viewer server with live chart data updates."""

import asyncio
import socket
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

import uvicorn

from bundlescope.main import create_app
from bundlescope.schemas.report import ReportOptions
from bundlescope.services.chart_data import compute_chart_data
from bundlescope.services.push_channel import PushChannel
from bundlescope.services.template import render_report_page
from bundlescope.utils.browser import open_browser
from bundlescope.utils.entrypoints import get_entrypoints

CHART_DATA_UPDATED = "chartDataUpdated"


@dataclass(frozen=True)
class ViewerSnapshot:
    """Chart data and entrypoints served together; replaced as one value."""

    chart_data: List[Any]
    entrypoints: List[str]


def bind_socket(host: str, port: int) -> socket.socket:
    """Bind a listening TCP socket; OSError (address in use, bad host) propagates."""
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    sock = socket.socket(family, socket.SOCK_STREAM)
    sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    try:
        sock.bind((host, port))
    except OSError:
        sock.close()
        raise
    sock.set_inheritable(True)
    return sock


class ReportServer:
    """Serves the viewer page and pushes chart data updates to open viewers.

    ``ws`` is the push channel, ``http`` the uvicorn server once listening.
    """

    def __init__(self, options: ReportOptions, snapshot: ViewerSnapshot):
        self.options = options
        self.logger = options.logger
        self._snapshot = snapshot
        self._update_lock = asyncio.Lock()
        self._serve_task: Optional[asyncio.Task] = None
        self.ws = PushChannel(self.logger)
        self.app = create_app(self)
        self.http: Optional[uvicorn.Server] = None
        self.bound_address: Optional[Tuple[str, int]] = None
        self.url: Optional[str] = None

    @property
    def chart_data(self) -> List[Any]:
        return self._snapshot.chart_data

    @property
    def entrypoints(self) -> List[str]:
        return self._snapshot.entrypoints

    def render_page(self) -> str:
        snapshot = self._snapshot
        return render_report_page(
            self.options, snapshot.chart_data, snapshot.entrypoints, mode="server"
        )

    async def listen(self) -> None:
        """Bind host:port, start uvicorn and announce the viewer URL."""
        options = self.options
        sock = bind_socket(options.host, options.port)

        config = uvicorn.Config(self.app, log_config=None, lifespan="off")
        self.http = uvicorn.Server(config)
        self._serve_task = asyncio.create_task(self.http.serve(sockets=[sock]))

        try:
            await self._wait_started()

            self.bound_address = tuple(sock.getsockname()[:2])
            self.url = options.analyzer_url(
                listen_port=options.port,
                listen_host=options.host,
                bound_address=self.bound_address,
            )

            self.logger.info(f"Bundlescope is started at {self.url}\nUse Ctrl+C to close it")

            if options.open_browser:
                open_browser(self.url, self.logger)
        except BaseException:
            await self._abort(sock)
            raise

    async def _wait_started(self) -> None:
        # uvicorn.Server only exposes a started flag, no startup event
        while not self.http.started:
            if self._serve_task.done():
                self._serve_task.result()
                raise RuntimeError("Viewer server stopped before it started listening")
            await asyncio.sleep(0.01)

    async def _abort(self, sock: socket.socket) -> None:
        """Stop a half-started listener; the caller re-raises the original error."""
        self.http.should_exit = True
        await asyncio.wait([self._serve_task])
        sock.close()

    async def update_chart_data(self, bundle_stats: Any) -> bool:
        """Recompute chart data and push it to every open viewer.

        Failed analysis keeps the current data and sends nothing.

        Returns:
            True when new chart data was published
        """
        async with self._update_lock:
            new_chart_data = compute_chart_data(self.options, bundle_stats, self.options.bundle_dir)
            if new_chart_data is None:
                return False

            self._snapshot = ViewerSnapshot(new_chart_data, get_entrypoints(bundle_stats))
            await self.ws.broadcast(CHART_DATA_UPDATED, new_chart_data)
            return True

    async def wait_closed(self) -> None:
        if self._serve_task is not None:
            await self._serve_task

    async def close(self) -> None:
        if self.http is not None:
            self.http.should_exit = True
        await self.wait_closed()


async def start_server(
    bundle_stats: Any, options: Any = None, **overrides: Any
) -> Optional[ReportServer]:
    """Start the live viewer for ``bundle_stats``.

    Args:
        bundle_stats: Decoded bundle stats (falls back to ``options.bundle_stats``)
        options: ReportOptions or a mapping of option names
        **overrides: Individual options taking precedence over ``options``

    Returns:
        The listening server, or None when the stats contain nothing to report

    Raises:
        OSError: If the host/port cannot be bound
        Exception: Whatever ``analyzer_url`` raises; the listener is shut down first
    """
    options = ReportOptions.coerce(options, **overrides)
    if bundle_stats is None:
        bundle_stats = options.bundle_stats

    chart_data = compute_chart_data(options, bundle_stats, options.bundle_dir)
    if chart_data is None:
        return None

    server = ReportServer(options, ViewerSnapshot(chart_data, get_entrypoints(bundle_stats)))
    await server.listen()
    return server


# Deprecated alias
start = start_server
