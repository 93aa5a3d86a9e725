import asyncio
import json
import socket
import unittest

from websockets.asyncio.client import connect

from server import EventServerConfig, EventStreamServer


def _free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


class HandleClientMessageTests(unittest.TestCase):
    def setUp(self) -> None:
        self.received: list[dict] = []

        def handler(message):
            self.received.append(dict(message))
            return {"command": message["command"], "accepted": True, "reason": "ok"}

        self.server = EventStreamServer(EventServerConfig(), command_handler=handler)

    def test_command_is_forwarded_and_wrapped(self) -> None:
        reply = json.loads(self.server.handle_client_message('{"command": "start"}'))

        self.assertEqual([{"command": "start"}], self.received)
        self.assertEqual("command_result", reply["type"])
        self.assertEqual("start", reply["command"])
        self.assertTrue(reply["accepted"])

    def test_invalid_json_returns_error(self) -> None:
        reply = json.loads(self.server.handle_client_message("{not json"))

        self.assertEqual("error", reply["type"])
        self.assertIn("Invalid JSON", reply["message"])
        self.assertEqual([], self.received)

    def test_non_object_returns_error(self) -> None:
        reply = json.loads(self.server.handle_client_message('["start"]'))

        self.assertEqual("error", reply["type"])
        self.assertEqual([], self.received)

    def test_without_handler_returns_error(self) -> None:
        server = EventStreamServer(EventServerConfig())

        reply = json.loads(server.handle_client_message('{"command": "start"}'))

        self.assertEqual("error", reply["type"])


class EventStreamServerTests(unittest.IsolatedAsyncioTestCase):
    async def asyncSetUp(self) -> None:
        self.port = _free_port()
        self.server = EventStreamServer(
            EventServerConfig(host="127.0.0.1", port=self.port),
            command_handler=lambda message: {
                "command": message.get("command"),
                "accepted": True,
                "reason": "ok",
            },
            status_provider=lambda: {"phase": "focus", "state": "stopped"},
        )
        await self.server.start()
        self.addAsyncCleanup(self.server.stop)

    async def _recv(self, websocket) -> dict:
        return json.loads(await asyncio.wait_for(websocket.recv(), timeout=2.0))

    async def _http_get(self, path: str) -> bytes:
        reader, writer = await asyncio.open_connection("127.0.0.1", self.port)
        writer.write(f"GET {path} HTTP/1.1\r\nHost: 127.0.0.1\r\n\r\n".encode("ascii"))
        await writer.drain()
        data = await asyncio.wait_for(reader.read(), timeout=2.0)
        writer.close()
        return data

    async def test_client_receives_hello_and_sticky_replay(self) -> None:
        self.server.publish("timer", action="tick", phase="focus")
        self.server.publish("settings", focus={"duration": 25})

        async with connect(f"ws://127.0.0.1:{self.port}/ws") as websocket:
            hello = await self._recv(websocket)
            first = await self._recv(websocket)
            second = await self._recv(websocket)

        self.assertEqual("hello", hello["type"])
        self.assertEqual("settings", first["type"])
        self.assertEqual("timer", second["type"])

    async def test_client_command_gets_result(self) -> None:
        async with connect(f"ws://127.0.0.1:{self.port}/ws") as websocket:
            await self._recv(websocket)
            await websocket.send(json.dumps({"command": "pause"}))
            reply = await self._recv(websocket)

        self.assertEqual("command_result", reply["type"])
        self.assertEqual("pause", reply["command"])

    async def test_publish_reaches_connected_client(self) -> None:
        async with connect(f"ws://127.0.0.1:{self.port}/ws") as websocket:
            await self._recv(websocket)
            self.server.publish("cycle", action="reset", phase="long_break")
            event = await self._recv(websocket)

        self.assertEqual("cycle", event["type"])
        self.assertEqual("long_break", event["phase"])

    async def test_http_routes(self) -> None:
        healthz = await self._http_get("/healthz")
        status = await self._http_get("/status")
        missing = await self._http_get("/nope")

        self.assertTrue(healthz.startswith(b"HTTP/1.1 200"))
        self.assertTrue(healthz.endswith(b"ok\n"))
        self.assertTrue(status.startswith(b"HTTP/1.1 200"))
        body = status.split(b"\r\n\r\n", 1)[1]
        self.assertEqual({"phase": "focus", "state": "stopped"}, json.loads(body))
        self.assertTrue(missing.startswith(b"HTTP/1.1 404"))

    async def test_stop_is_idempotent(self) -> None:
        await self.server.stop()
        await self.server.stop()

        self.assertFalse(self.server.is_running)


if __name__ == "__main__":
    unittest.main()
