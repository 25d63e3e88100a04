import time
import logging
from fastapi import HTTPException
from starlette.datastructures import Headers
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

logger = logging.getLogger("performance")

BODY_TOO_LARGE = "Request body too large."


class TimingMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, slow_ms: int = 2500):
        super().__init__(app)
        self.slow_ms = slow_ms

    async def dispatch(self, request: Request, call_next):
        start_time = time.time()
        response: Response = await call_next(request)
        process_time = (time.time() - start_time) * 1000

        # Skip noisy liveness probes
        path = request.url.path
        if path not in ("/", "/health", "/favicon.ico"):
            if process_time > self.slow_ms:
                logger.warning(f"🐌 Slow request {request.method} {path} took {process_time:.2f} ms (threshold {self.slow_ms} ms)")
            else:
                logger.info(f"⏱️ Request {request.method} {path} took {process_time:.2f} ms")

        response.headers["X-Process-Time-ms"] = f"{process_time:.2f}"
        return response


class BodySizeLimitMiddleware:
    """Reject request bodies larger than max_bytes with a 413.

    A declared Content-Length is checked up front; bodies without one
    (chunked uploads) are counted as they are read.
    """

    def __init__(self, app: ASGIApp, max_bytes: int):
        self.app = app
        self.max_bytes = max_bytes

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        length = Headers(scope=scope).get("content-length")
        if length is not None:
            try:
                too_large = int(length) > self.max_bytes
            except ValueError:
                response = JSONResponse(status_code=400, content={"error": "Invalid Content-Length header."})
                await response(scope, receive, send)
                return
            if too_large:
                logger.warning(f"Rejected {scope['method']} {scope['path']}: body of {length} bytes")
                response = JSONResponse(status_code=413, content={"error": BODY_TOO_LARGE})
                await response(scope, receive, send)
                return

        received = 0

        async def limited_receive() -> Message:
            nonlocal received
            message = await receive()
            if message["type"] == "http.request":
                received += len(message.get("body", b""))
                if received > self.max_bytes:
                    logger.warning(f"Rejected {scope['method']} {scope['path']}: body passed {self.max_bytes} bytes")
                    # Raised inside the body read, so FastAPI's HTTP error handler renders it
                    raise HTTPException(status_code=413, detail=BODY_TOO_LARGE)
            return message

        await self.app(scope, limited_receive, send)
