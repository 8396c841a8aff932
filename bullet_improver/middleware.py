"""Request body size ceiling.

Rejects requests whose Content-Length exceeds the limit, and counts the
bytes of chunked uploads (no Content-Length) as they arrive.
"""

from fastapi import HTTPException
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from .config import DEFAULT_MAX_BODY_BYTES


class BodyLimitMiddleware:
    """ASGI middleware that enforces a request body size ceiling."""

    def __init__(self, app: ASGIApp, max_bytes: int = DEFAULT_MAX_BODY_BYTES):
        self.app = app
        self.max_bytes = max_bytes

    def _too_large(self) -> JSONResponse:
        return JSONResponse(status_code=413, content={"error": _message(self.max_bytes)})

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        content_length_raw = headers.get(b"content-length")
        if content_length_raw is not None:
            try:
                content_length = int(content_length_raw)
            except (ValueError, TypeError):
                content_length = 0
            if content_length > self.max_bytes:
                await self._too_large()(scope, receive, send)
                return

        bytes_received = 0
        limit = self.max_bytes

        async def limited_receive() -> dict:
            nonlocal bytes_received
            message = await receive()
            if message.get("type") == "http.request":
                bytes_received += len(message.get("body", b""))
                if bytes_received > limit:
                    raise BodyTooLarge(limit)
            return message

        try:
            await self.app(scope, limited_receive, send)
        except BodyTooLarge:
            await self._too_large()(scope, receive, send)


class BodyTooLarge(HTTPException):
    """Raised from ``receive`` once a streamed body passes the limit.

    An HTTPException so FastAPI's body parsing re-raises it as-is and the
    app's error handler renders it as a 413.
    """

    def __init__(self, max_bytes: int):
        super().__init__(status_code=413, detail=_message(max_bytes))


def _message(max_bytes: int) -> str:
    return f"Request body exceeds {max_bytes} bytes"
