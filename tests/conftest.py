"""Pytest configuration and fixtures."""

import asyncio
import json
import hashlib
import tempfile
import threading
from pathlib import Path

import pytest
from aiohttp import web

VERSION = "1.0.0"

# Route value that makes the server drop the connection mid-body
TRUNCATED = object()


def sha256(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


class ResourceServer:
    """
    Local HTTP server standing in for the resource CDN.

    routes maps URL paths to a body (bytes), an HTTP status (int), or
    TRUNCATED. Unknown paths return 404. Tracks every request and the peak
    number of requests being handled at once.
    """

    def __init__(self, delay: float = 0.0):
        self.routes = {}
        self.delay = delay
        self.requests = []
        self.active = 0
        self.peak_active = 0
        self.base_url = ""
        self._lock = threading.Lock()
        self._loop = None
        self._runner = None
        self._thread = None

    def resource_path(self, name: str, version: str = VERSION) -> str:
        return f"/v{version}/resources/{name}"

    def publish(self, fonts=None, images=None, version: str = VERSION, manifest=None):
        """
        Serve a manifest plus file bodies.

        fonts/images map relative paths to bytes. Pass manifest to serve a
        manifest that differs from the files (e.g. stale hashes).
        """
        fonts = fonts or {}
        images = images or {}
        if manifest is None:
            manifest = {
                "fonts": [{"file": name, "hash": sha256(data)} for name, data in fonts.items()],
                "images": [{"file": name, "hash": sha256(data)} for name, data in images.items()],
            }

        self.routes[self.resource_path("resources.json", version)] = json.dumps(manifest).encode()
        for category, files in (("fonts", fonts), ("images", images)):
            for name, data in files.items():
                self.routes[self.resource_path(f"{category}/{name}", version)] = data
        return manifest

    def file_requests(self) -> list:
        return [p for p in self.requests if not p.endswith("resources.json")]

    async def _handle(self, request: web.Request):
        with self._lock:
            self.requests.append(request.path)
            self.active += 1
            self.peak_active = max(self.peak_active, self.active)
        try:
            if self.delay:
                await asyncio.sleep(self.delay)
            value = self.routes.get(request.path)
            if value is None:
                return web.Response(status=404)
            if isinstance(value, int):
                return web.Response(status=value)
            if value is TRUNCATED:
                response = web.StreamResponse()
                response.content_length = 100_000
                await response.prepare(request)
                await response.write(b"x" * 1000)
                request.transport.close()
                return response
            return web.Response(body=value)
        finally:
            with self._lock:
                self.active -= 1

    async def _start(self):
        app = web.Application()
        app.router.add_route("GET", "/{tail:.*}", self._handle)
        self._runner = web.AppRunner(app)
        await self._runner.setup()
        site = web.TCPSite(self._runner, "127.0.0.1", 0)
        await site.start()
        port = self._runner.addresses[0][1]
        self.base_url = f"http://127.0.0.1:{port}/"

    def start(self):
        self._loop = asyncio.new_event_loop()
        started = threading.Event()

        def run():
            asyncio.set_event_loop(self._loop)
            self._loop.run_until_complete(self._start())
            started.set()
            self._loop.run_forever()

        self._thread = threading.Thread(target=run, daemon=True)
        self._thread.start()
        if not started.wait(10):
            raise RuntimeError("resource server did not start")

    def stop(self):
        asyncio.run_coroutine_threadsafe(self._runner.cleanup(), self._loop).result(10)
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(10)
        self._loop.close()


@pytest.fixture
def server():
    srv = ResourceServer()
    srv.start()
    yield srv
    srv.stop()


@pytest.fixture
def temp_dir():
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def roots(temp_dir):
    """(fonts_dir, images_dir) under a temp resources directory."""
    return temp_dir / "resources" / "fonts", temp_dir / "resources" / "images"

