"""Static asset serving with precompressed variants."""

import mimetypes
import os
import stat
from typing import Set

import anyio.to_thread
from starlette.responses import FileResponse, Response
from starlette.staticfiles import StaticFiles
from starlette.types import Receive, Scope, Send
from starlette.websockets import WebSocketClose

# Checked in order; brotli wins over gzip when both are accepted
PRECOMPRESSED = (("br", ".br"), ("gzip", ".gz"))


def accepted_encodings(scope: Scope) -> Set[str]:
    """Parse the request's Accept-Encoding header, dropping ``q=0`` entries."""
    header = ""
    for key, value in scope.get("headers", []):
        if key == b"accept-encoding":
            header = value.decode("latin-1")
            break

    encodings = set()
    for part in header.split(","):
        name, _, params = part.strip().partition(";")
        name = name.strip().lower()
        if not name:
            continue
        params = params.replace(" ", "")
        if params in ("q=0", "q=0.0", "q=0.00", "q=0.000"):
            continue
        encodings.add(name)
    return encodings


class PrecompressedStaticFiles(StaticFiles):
    """Serve ``<file>.br`` or ``<file>.gz`` in place of ``<file>`` when accepted.

    Falls back to the plain file. Any non-HTTP scope routed here (such as a
    WebSocket upgrade on an unknown path) is closed without being served.
    """

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await WebSocketClose()(scope, receive, send)
            return
        await super().__call__(scope, receive, send)

    async def get_response(self, path: str, scope: Scope) -> Response:
        encodings = accepted_encodings(scope)
        if scope["method"] in ("GET", "HEAD") and encodings:
            response = await self._precompressed_response(path, encodings)
            if response is not None:
                return response
        return await super().get_response(path, scope)

    async def _precompressed_response(self, path: str, encodings: Set[str]):
        target = path
        _, stat_result = await anyio.to_thread.run_sync(self.lookup_path, path)
        if stat_result is not None and stat.S_ISDIR(stat_result.st_mode):
            if not self.html:
                return None
            target = os.path.join(path, "index.html")

        for encoding, suffix in PRECOMPRESSED:
            if encoding not in encodings:
                continue
            full_path, stat_result = await anyio.to_thread.run_sync(
                self.lookup_path, target + suffix
            )
            if stat_result is None or not stat.S_ISREG(stat_result.st_mode):
                continue
            media_type, _ = mimetypes.guess_type(target)
            return FileResponse(
                full_path,
                stat_result=stat_result,
                media_type=media_type or "application/octet-stream",
                headers={"Content-Encoding": encoding, "Vary": "Accept-Encoding"},
            )
        return None
