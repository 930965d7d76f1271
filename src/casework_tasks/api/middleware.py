"""ASGI middleware for request validation."""

import re
from typing import Dict, List, Pattern, Tuple, cast

from fastapi.responses import JSONResponse
from starlette.types import ASGIApp, Receive, Scope, Send

from casework_tasks.domain.entities.task import utc_now

_JSON_BODY_ENDPOINTS: Tuple[Tuple[str, Pattern[str]], ...] = (
    ("POST", re.compile(r"^/api/v1/tasks/?$")),
    ("PUT", re.compile(r"^/api/v1/tasks/[^/]+/?$")),
    ("PUT", re.compile(r"^/api/v1/tasks/[^/]+/status/?$")),
)

UNSUPPORTED_MEDIA_TYPE_MESSAGE = (
    "Content-Type header is missing or not supported. Expected: application/json"
)


class RequestValidationMiddleware:
    """
    ASGI middleware that validates Content-Type before routing.

    Returns 415 when a task endpoint that takes a JSON body is called
    without an ``application/json`` Content-Type. Other method and path
    combinations pass through so the router can answer 404/405.
    """

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        method = cast(str, scope.get("method", "GET"))
        path = cast(str, scope.get("path", ""))

        expects_json = any(
            candidate == method and pattern.match(path) is not None
            for candidate, pattern in _JSON_BODY_ENDPOINTS
        )
        if not expects_json:
            await self.app(scope, receive, send)
            return

        raw_headers = cast(List[Tuple[bytes, bytes]], scope.get("headers", []))
        headers: Dict[bytes, bytes] = dict(raw_headers)
        content_type = headers.get(b"content-type", b"").decode("latin-1").lower()

        if not content_type.startswith("application/json"):
            response = JSONResponse(
                status_code=415,
                content={
                    "status": 415,
                    "error": "Unsupported Media Type",
                    "message": UNSUPPORTED_MEDIA_TYPE_MESSAGE,
                    "timestamp": utc_now().isoformat(),
                },
            )
            await response(scope, receive, send)
            return

        await self.app(scope, receive, send)
