"""Logging setup with request IDs and credential redaction."""

import logging
import re
import sys
import uuid
from contextvars import ContextVar
from typing import TextIO

# Request ID of the request currently being served ("-" outside a request)
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")

# Google API keys: "AIza" followed by 35 url-safe characters
_API_KEY_RE = re.compile(r"AIza[0-9A-Za-z_-]{35}")


class RequestIDFilter(logging.Filter):
    """Stamp every record with the current request ID and redact API keys.

    Upstream error messages and exception reprs can echo the credential back;
    any Google API key found in the rendered message is masked before the
    record reaches a handler.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("-")  # type: ignore[attr-defined]
        message = record.getMessage()
        redacted = redact_secrets(message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def generate_request_id() -> str:
    return uuid.uuid4().hex[:12]


def mask_secret(secret: str | None) -> str:
    """Render a credential for logs: only the last four characters survive."""
    if not secret:
        return "<unset>"
    if len(secret) <= 4:
        return "****"
    return f"****{secret[-4:]}"


def redact_secrets(text: str) -> str:
    """Replace every Google API key in text with its masked form."""
    return _API_KEY_RE.sub(lambda m: mask_secret(m.group(0)), text)


def setup_logging(level: str = "INFO", stream: TextIO | None = None) -> None:
    """Configure logging for the service or a script using the library.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        stream: Destination stream, stderr by default.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)-8s [%(request_id)s] %(name)s - %(message)s"))
    handler.addFilter(RequestIDFilter())

    root = logging.getLogger()
    root.setLevel(numeric_level)
    root.handlers.clear()
    root.addHandler(handler)

    # httpx logs full request URLs at INFO
    for noisy in ("httpx", "httpcore"):
        logging.getLogger(noisy).setLevel(max(numeric_level, logging.WARNING))
