"""Browser launching and display URL helpers."""

import logging
import webbrowser
from typing import Tuple


def open_browser(url: str, logger: logging.Logger) -> None:
    """Open ``url`` in the user's browser; failures are logged, never raised."""
    try:
        webbrowser.open(url)
    except Exception as exc:  # noqa: BLE001 - opener errors are not fatal
        logger.debug(f'Opener failed to open "{url}":\n{exc}')


def default_analyzer_url(
    *, listen_port: int, listen_host: str, bound_address: Tuple[str, int]
) -> str:
    """Build the display URL from the address the listener actually bound.

    Wildcard hosts are shown as ``localhost`` since they are not browsable.
    """
    host = listen_host
    if host in ("0.0.0.0", "::", ""):
        host = "localhost"
    elif ":" in host:
        host = f"[{host}]"
    return f"http://{host}:{bound_address[1]}"
