"""API key authentication, upload size limits, and request ID middleware."""

import logging
import re
import secrets
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from meeting_digest.core.logging import generate_request_id, request_id_var

logger = logging.getLogger(__name__)

# Inbound ids a front-end may supply to correlate its own logs with ours
_CLIENT_REQUEST_ID_RE = re.compile(r"^[A-Za-z0-9_-]{1,64}$")

PUBLIC_PATHS = frozenset({"/health"})


def _error_response(status_code: int, error_type: str, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": {"type": error_type, "message": message}})


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Bind a request ID to the logging context and echo it in X-Request-ID.

    A well-formed X-Request-ID sent by the client is reused; anything else is
    replaced by a fresh id.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        supplied = request.headers.get("x-request-id", "")
        rid = supplied if _CLIENT_REQUEST_ID_RE.match(supplied) else generate_request_id()
        request.state.request_id = rid
        token = request_id_var.set(rid)
        start = time.perf_counter()
        try:
            response = await call_next(request)
            logger.info(
                "%s %s -> %s (%.0f ms)",
                request.method,
                request.url.path,
                response.status_code,
                (time.perf_counter() - start) * 1000,
            )
            response.headers["X-Request-ID"] = rid
            return response
        finally:
            request_id_var.reset(token)


class APIKeyMiddleware(BaseHTTPMiddleware):
    """Require `Authorization: Bearer <API_KEY>` when a service key is configured.

    PUBLIC_PATHS and CORS preflight requests are never checked, so a browser
    front-end on another origin can negotiate before sending the key.
    """

    def __init__(self, app, api_key: str | None) -> None:  # noqa: ANN001
        super().__init__(app)
        self.api_key = api_key

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if self.api_key is None or request.url.path in PUBLIC_PATHS or request.method == "OPTIONS":
            return await call_next(request)

        scheme, _, provided_key = request.headers.get("authorization", "").partition(" ")
        if scheme != "Bearer" or not provided_key:
            logger.warning("Rejected %s %s: no bearer token", request.method, request.url.path)
            return _error_response(
                401,
                "auth_required",
                "Missing or malformed Authorization header. Expected: Bearer <API_KEY>",
            )

        if not secrets.compare_digest(provided_key.encode(), self.api_key.encode()):
            logger.warning("Rejected %s %s: wrong service key", request.method, request.url.path)
            return _error_response(401, "auth_failed", "Invalid API key")

        return await call_next(request)


class MaxBodySizeMiddleware(BaseHTTPMiddleware):
    """Reject uploads whose Content-Length exceeds a configured limit.

    Only enforced on POST requests to the file upload endpoint. This guards
    the service's memory; it is not a validation of the audio itself.
    """

    def __init__(self, app, max_bytes: int) -> None:  # noqa: ANN001
        super().__init__(app)
        self.max_bytes = max_bytes
        self._guarded_paths = {"/v1/files"}

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method == "POST" and request.url.path in self._guarded_paths:
            content_length = request.headers.get("content-length")
            # Non-numeric Content-Length is left to the server to reject
            if content_length is not None and content_length.isdigit() and int(content_length) > self.max_bytes:
                logger.warning("Rejected upload of %s bytes (limit %d)", content_length, self.max_bytes)
                return _error_response(
                    413,
                    "request_too_large",
                    f"Request body exceeds maximum allowed size ({self.max_bytes} bytes)",
                )

        return await call_next(request)
