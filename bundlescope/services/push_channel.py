"""WebSocket connection registry used to push chart data updates."""

import json
import logging
from typing import Any, Set

from starlette.websockets import WebSocket, WebSocketState


class PushChannel:
    """Tracks open viewer connections and broadcasts server events to them.

    Clients never send anything meaningful; inbound frames are read and dropped
    only so that disconnects are noticed.
    """

    def __init__(self, logger: logging.Logger):
        self.clients: Set[WebSocket] = set()
        self._logger = logger

    async def handle(self, websocket: WebSocket) -> None:
        self.clients.add(websocket)
        try:
            await websocket.accept()
            while True:
                message = await websocket.receive()
                if message["type"] == "websocket.disconnect":
                    break
        except Exception as exc:  # noqa: BLE001 - connection errors are reported, not raised
            self.handle_error(exc)
        finally:
            self.clients.discard(websocket)

    def handle_error(self, exc: BaseException) -> None:
        # Ignore network errors like ECONNRESET, EPIPE, etc.
        if getattr(exc, "errno", None):
            return
        self._logger.info(str(exc))

    @staticmethod
    def is_open(websocket: Any) -> bool:
        return (
            websocket.client_state == WebSocketState.CONNECTED
            and websocket.application_state == WebSocketState.CONNECTED
        )

    async def broadcast(self, event: str, data: Any) -> int:
        """Send one JSON text frame to every open connection.

        Returns:
            Number of connections the frame was delivered to
        """
        message = json.dumps({"event": event, "data": data})
        sent = 0
        for client in list(self.clients):
            if not self.is_open(client):
                continue
            try:
                await client.send_text(message)
            except Exception as exc:  # noqa: BLE001 - one broken client must not stop the broadcast
                self.handle_error(exc)
                continue
            sent += 1
        return sent
