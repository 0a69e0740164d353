"""HTTP transport to the generative-language API."""

import logging
from typing import Any

import httpx

from meeting_digest.core.config import SummarizerConfig
from meeting_digest.core.exceptions import (
    ConfigurationError,
    UpstreamAPIError,
    UpstreamError,
    UpstreamTimeoutError,
    UpstreamUnreachableError,
)

logger = logging.getLogger(__name__)


async def post_generate_content(
    request_body: dict[str, Any],
    api_key: str,
    config: SummarizerConfig,
) -> httpx.Response:
    """
    Send a generateContent request to the upstream API.

    Args:
        request_body: The request body dict to send
        api_key: User credential, sent only in the x-goog-api-key header
        config: Library configuration for URL and timeout settings

    Returns:
        httpx.Response object from upstream

    Raises:
        ConfigurationError: If no API base URL or model is configured
        UpstreamUnreachableError: If connection to upstream fails
        UpstreamTimeoutError: If upstream request times out
        UpstreamError: For any other transport failure
    """
    if not config.api_base_url or not config.model:
        raise ConfigurationError("No API base URL or model configured. Please set both in your SummarizerConfig.")

    url = config.generate_content_url

    timeout = httpx.Timeout(
        config.timeout_s,
        connect=config.connect_timeout_s,
    )

    try:
        async with httpx.AsyncClient(timeout=timeout) as client:
            logger.debug(f"Posting generateContent to {url}")
            response = await client.post(
                url,
                json=request_body,
                headers={
                    "Content-Type": "application/json",
                    "x-goog-api-key": api_key,
                },
            )
            return response

    except (httpx.ConnectError, httpx.NetworkError, httpx.ProtocolError) as e:
        logger.error(f"Connection error to upstream {url}: {e}")
        raise UpstreamUnreachableError(
            f"Connection to upstream failed: {str(e)}",
            upstream=config.api_base_url,
        ) from e

    except httpx.TimeoutException as e:
        logger.error(f"Timeout error to upstream {url}: {e}")
        raise UpstreamTimeoutError(
            "Generative API did not respond in time",
            upstream=config.api_base_url,
        ) from e

    except httpx.HTTPError as e:
        logger.error(f"HTTP error talking to upstream {url}: {e}")
        raise UpstreamError(
            f"Request to upstream failed: {str(e)}",
            upstream=config.api_base_url,
        ) from e


def raise_for_upstream_error(response: httpx.Response, upstream: str | None = None) -> None:
    """
    Raise UpstreamAPIError when the API answered with a non-2xx status.

    The API reports failures as {"error": {"code", "message", "status",
    "details": [{"reason": ...}]}}; whatever part of that is present is
    carried on the exception.
    """
    if response.is_success:
        return

    message = f"Upstream returned HTTP {response.status_code}"
    status = None
    reason = None
    try:
        error = response.json().get("error", {})
    except (ValueError, AttributeError):
        error = {}

    if isinstance(error, dict):
        message = error.get("message") or message
        status = error.get("status")
        for detail in error.get("details") or []:
            if isinstance(detail, dict) and detail.get("reason"):
                reason = detail["reason"]
                break

    logger.error(
        "Upstream error %s (status=%s, reason=%s): %s",
        response.status_code,
        status,
        reason,
        message,
    )
    raise UpstreamAPIError(
        message,
        status_code=response.status_code,
        status=status,
        reason=reason,
        upstream=upstream,
    )


def extract_text(response_json: dict[str, Any]) -> str:
    """Join the text parts of the first candidate; empty string when absent."""
    candidates = response_json.get("candidates") or []
    if not candidates:
        return ""
    parts = (candidates[0].get("content") or {}).get("parts") or []
    return "".join(part.get("text", "") for part in parts if isinstance(part, dict))
