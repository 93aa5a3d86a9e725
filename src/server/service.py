from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Callable, Mapping, Optional
from urllib.parse import urlsplit

import websockets
from websockets.asyncio.server import Server, ServerConnection, serve
from websockets.datastructures import Headers
from websockets.http11 import Request, Response

from contracts.ui_protocol import EVENT_COMMAND_RESULT, EVENT_ERROR, EVENT_HELLO

from .config import HEALTHZ_PATH, STATUS_PATH, EventServerConfig
from .events import StickyEventStore, make_event

CommandHandler = Callable[[Mapping[str, Any]], Mapping[str, Any]]
StatusProvider = Callable[[], Mapping[str, Any]]


class EventStreamServer:
    """Websocket event stream served on the caller's asyncio loop.

    Timer callbacks and client handlers share one loop, so publishing only
    schedules a broadcast task and never blocks the caller.
    """

    def __init__(
        self,
        config: EventServerConfig,
        *,
        command_handler: Optional[CommandHandler] = None,
        status_provider: Optional[StatusProvider] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self._config = config
        self._command_handler = command_handler
        self._status_provider = status_provider
        self._logger = logger or logging.getLogger("ui_server")
        self._server: Optional[Server] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._connected_clients: set[ServerConnection] = set()
        self._pending: set[asyncio.Task] = set()
        self._sticky = StickyEventStore()

    @property
    def host(self) -> str:
        return self._config.host

    @property
    def port(self) -> int:
        return self._config.port

    @property
    def websocket_path(self) -> str:
        return self._config.websocket_path

    @property
    def is_running(self) -> bool:
        return self._server is not None

    async def start(self) -> None:
        if self.is_running:
            self._logger.warning("UI server is already running")
            return

        self._loop = asyncio.get_running_loop()
        self._server = await serve(
            self._handler,
            host=self._config.host,
            port=self._config.port,
            process_request=self._process_request,
            logger=self._logger,
        )
        self._logger.info(
            "UI server running at http://%s:%d (websocket: %s)",
            self._config.host,
            self._config.port,
            self._config.websocket_path,
        )

    async def stop(self) -> None:
        if self._server is None:
            return

        await self._close_clients()
        self._server.close()
        await self._server.wait_closed()
        if self._pending:
            await asyncio.gather(*self._pending, return_exceptions=True)
        self._server = None
        self._loop = None

    def publish(self, event_type: str, **payload: Any) -> None:
        message = make_event(event_type, **payload)
        self._sticky.remember(event_type, message)
        if not self.is_running or self._loop is None or not self._connected_clients:
            return

        task = self._loop.create_task(self._broadcast(message))
        self._pending.add(task)
        task.add_done_callback(self._consume_task_result)

    def _consume_task_result(self, task: asyncio.Task) -> None:
        self._pending.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            self._logger.warning("Broadcast failed: %s", error)

    async def _handler(self, websocket: ServerConnection) -> None:
        request_path = (
            urlsplit(websocket.request.path).path
            if websocket.request is not None
            else ""
        )
        if request_path != self._config.websocket_path:
            await websocket.close(code=1008, reason="Invalid websocket path")
            return

        self._connected_clients.add(websocket)
        self._logger.info("Client connected: %s", websocket.remote_address)
        try:
            await websocket.send(make_event(EVENT_HELLO, message="Event stream connected"))
            for message in self._sticky.snapshot():
                await websocket.send(message)
            async for message in websocket:
                reply = self.handle_client_message(message)
                if reply is not None:
                    await websocket.send(reply)
        except websockets.exceptions.ConnectionClosed:
            self._logger.info("Client disconnected: %s", websocket.remote_address)
        finally:
            self._connected_clients.discard(websocket)

    def handle_client_message(self, raw: str | bytes) -> Optional[str]:
        """Turn one client frame into the serialized reply, if any."""
        self._logger.debug("Received from client: %s", raw)
        try:
            payload = json.loads(raw)
        except (TypeError, ValueError) as error:
            return make_event(EVENT_ERROR, message=f"Invalid JSON: {error}")
        if not isinstance(payload, dict):
            return make_event(EVENT_ERROR, message="Command must be a JSON object")
        if self._command_handler is None:
            return make_event(EVENT_ERROR, message="Commands are not supported")
        result = self._command_handler(payload)
        return make_event(EVENT_COMMAND_RESULT, **result)

    async def _process_request(
        self,
        connection: ServerConnection,
        request: Request,
    ) -> Response | None:
        del connection  # Unused in static routing.
        path = urlsplit(request.path).path

        if path == self._config.websocket_path:
            return None

        if path == HEALTHZ_PATH:
            return self._response(
                200,
                "OK",
                b"ok\n",
                "text/plain; charset=utf-8",
            )

        if path == STATUS_PATH and self._status_provider is not None:
            body = json.dumps(dict(self._status_provider())).encode("utf-8")
            return self._response(
                200,
                "OK",
                body,
                "application/json",
            )

        return self._response(
            404,
            "Not Found",
            b"not found\n",
            "text/plain; charset=utf-8",
        )

    def _response(
        self,
        status_code: int,
        reason_phrase: str,
        body: bytes,
        content_type: str,
    ) -> Response:
        headers = Headers()
        headers["Content-Type"] = content_type
        headers["Content-Length"] = str(len(body))
        headers["Cache-Control"] = "no-store"
        return Response(status_code, reason_phrase, headers, body)

    async def _close_clients(self) -> None:
        if not self._connected_clients:
            return

        tasks = [
            client.close(code=1001, reason="Server shutting down")
            for client in tuple(self._connected_clients)
        ]
        await asyncio.gather(*tasks, return_exceptions=True)
        self._connected_clients.clear()

    async def _broadcast(self, message: str) -> None:
        if not self._connected_clients:
            return

        clients = tuple(self._connected_clients)
        disconnected = []
        tasks = [client.send(message) for client in clients]
        results = await asyncio.gather(*tasks, return_exceptions=True)
        for client, result in zip(clients, results):
            if isinstance(result, Exception):
                disconnected.append(client)
                self._logger.warning("Failed to send message to client: %s", result)

        for client in disconnected:
            self._connected_clients.discard(client)
