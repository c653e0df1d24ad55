"""
ThemeScore Request Limits
ASGI middleware capping request body size.
"""
from starlette.datastructures import Headers
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from ..utils.logging import get_logger


class BodySizeLimitMiddleware:
    """
    Reject request bodies larger than ``max_body_bytes`` with 413.

    A declared Content-Length is checked up front. Bodies without one
    (chunked transfer) are buffered up to the limit and replayed to the
    application, so nothing past the limit is ever parsed.
    """

    def __init__(self, app: ASGIApp, max_body_bytes: int):
        self.app = app
        self.max_body_bytes = max_body_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        content_length = Headers(scope=scope).get("content-length")
        if content_length is not None:
            if not content_length.isdigit():
                response = JSONResponse(status_code=400, content={"detail": "invalid Content-Length"})
                await response(scope, receive, send)
                return
            if int(content_length) > self.max_body_bytes:
                await self._reject(scope, receive, send, int(content_length))
                return
            await self.app(scope, receive, send)
            return

        chunks = []
        received = 0
        more_body = True
        while more_body:
            message = await receive()
            if message["type"] == "http.disconnect":
                return
            body = message.get("body", b"")
            received += len(body)
            if received > self.max_body_bytes:
                await self._reject(scope, receive, send, received)
                return
            chunks.append(body)
            more_body = message.get("more_body", False)

        buffered = b"".join(chunks)
        replayed = False

        async def replay() -> Message:
            nonlocal replayed
            if not replayed:
                replayed = True
                return {"type": "http.request", "body": buffered, "more_body": False}
            return await receive()

        await self.app(scope, replay, send)

    async def _reject(self, scope: Scope, receive: Receive, send: Send, size: int) -> None:
        get_logger().warning("Request body too large",
                             extra={"received_bytes": size, "path": scope.get("path", "")})
        max_mb = self.max_body_bytes // (1024 * 1024)
        response = JSONResponse(
            status_code=413,
            content={"detail": f"request body too large. Maximum size: {max_mb}MB"}
        )
        await response(scope, receive, send)
