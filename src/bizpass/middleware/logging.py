"""Request logging and ID injection middleware."""

import time
import uuid

from starlette.types import ASGIApp, Message, Receive, Scope, Send

from bizpass.core.logging import get_logger, set_request_id

REQUEST_ID_HEADER = b"x-request-id"


class RequestIDMiddleware:
    """
    Tag every HTTP request with an id and log its start and completion.

    An incoming X-Request-ID header is reused, otherwise a UUID is generated.
    The id is echoed on the response and bound into every log line emitted
    while the request is handled.
    """

    def __init__(self, app: ASGIApp):
        self.app = app
        self.logger = get_logger(__name__)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        headers = dict(scope.get("headers", []))
        request_id = headers.get(REQUEST_ID_HEADER, str(uuid.uuid4()).encode()).decode("latin1")
        set_request_id(request_id)
        started = time.perf_counter()

        self.logger.info(
            "request.start",
            method=scope["method"],
            path=scope["path"],
        )

        async def send_with_request_id(message: Message) -> None:
            if message["type"] == "http.response.start":
                response_headers = list(message.get("headers", []))
                response_headers.append((REQUEST_ID_HEADER, request_id.encode("latin1")))
                message["headers"] = response_headers

                self.logger.info(
                    "request.complete",
                    status_code=message.get("status"),
                    duration_ms=round((time.perf_counter() - started) * 1000, 2),
                )

            await send(message)

        await self.app(scope, receive, send_with_request_id)
