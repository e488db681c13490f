"""Attach request and owner context to Sentry error reports."""

import sentry_sdk
from starlette.types import ASGIApp, Receive, Scope, Send

from bizpass.core.logging import get_request_id


class SentryContextMiddleware:
    """
    Tag the current Sentry scope with request_id and the session's user_id.

    Must sit inside SessionMiddleware and RequestIDMiddleware so both the
    session and the request id are populated when it runs.
    """

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = get_request_id()
        sentry_sdk.set_tag("request_id", request_id)

        session = scope.get("session") or {}
        user_id = session.get("user_id")
        if user_id:
            sentry_sdk.set_user({"id": user_id})
            sentry_sdk.set_tag("user_id", user_id)

        active_business_id = session.get("active_business_id")
        if active_business_id:
            sentry_sdk.set_tag("business_id", active_business_id)

        sentry_sdk.set_context(
            "request",
            {
                "method": scope.get("method"),
                "path": scope.get("path"),
                "request_id": request_id,
            },
        )

        await self.app(scope, receive, send)
