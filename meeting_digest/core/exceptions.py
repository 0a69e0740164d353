"""Custom exceptions and error classification for the meeting digest library."""

from enum import Enum

GENERIC_FAILURE_MESSAGE = "AI 분석 중 오류가 발생했습니다."
UNKNOWN_FAILURE_MESSAGE = "알 수 없는 오류가 발생했습니다."


class SummarizerError(Exception):
    """Base exception for all meeting digest errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidRequestError(SummarizerError):
    """Raised when a request is rejected before reaching the upstream API."""

    pass


class MissingCredentialError(InvalidRequestError):
    """Raised when no API credential was supplied."""

    pass


class NoAudioError(InvalidRequestError):
    """Raised when there is no audio to analyze."""

    pass


class AudioEncodingError(SummarizerError):
    """Raised when an uploaded file cannot be encoded for transmission."""

    def __init__(self, message: str, filename: str | None = None):
        self.filename = filename
        super().__init__(message)


class UpstreamError(SummarizerError):
    """Base class for upstream-related errors."""

    def __init__(self, message: str, upstream: str | None = None):
        self.upstream = upstream
        super().__init__(message)


class UpstreamUnreachableError(UpstreamError):
    """Raised when the upstream API is unreachable."""

    pass


class UpstreamTimeoutError(UpstreamError):
    """Raised when a request to the upstream API times out."""

    pass


class UpstreamAPIError(UpstreamError):
    """Raised when the upstream API answers with an error status.

    Args:
        message: Error message reported by the API
        status_code: HTTP status code of the reply
        status: Canonical status string from the error body (e.g. INVALID_ARGUMENT)
        reason: Machine-readable reason from the error details (e.g. API_KEY_INVALID)
    """

    def __init__(
        self,
        message: str,
        status_code: int,
        status: str | None = None,
        reason: str | None = None,
        upstream: str | None = None,
    ):
        self.status_code = status_code
        self.status = status
        self.reason = reason
        super().__init__(message, upstream=upstream)


class EmptyResponseError(SummarizerError):
    """Raised when the summarization call returns no usable text."""

    pass


class ChatError(SummarizerError):
    """Raised when a single chat turn fails."""

    pass


class ConfigurationError(SummarizerError):
    """Raised when there is a configuration problem."""

    pass


class ErrorKind(str, Enum):
    """Coarse failure categories shown to the user."""

    INVALID_CREDENTIAL = "invalid_credential"
    UNSUPPORTED_MEDIA = "unsupported_media"
    NETWORK = "network"
    EMPTY_RESPONSE = "empty_response"
    INVALID_REQUEST = "invalid_request"
    OTHER = "other"


_KIND_MESSAGES = {
    ErrorKind.INVALID_CREDENTIAL: "API Key가 유효하지 않습니다. 다시 확인해주세요.",
    ErrorKind.UNSUPPORTED_MEDIA: "지원되지 않는 오디오 형식이거나 MIME Type 오류입니다.",
    ErrorKind.NETWORK: "네트워크 연결을 확인하거나, API Key에 과금 프로젝트가 연결되었는지 확인하세요.",
}

# Substrings the API puts in its free-text messages. Only consulted when the
# error carries no typed reason.
_MESSAGE_HINTS = (
    ("API key not valid", ErrorKind.INVALID_CREDENTIAL),
    ("mime type", ErrorKind.UNSUPPORTED_MEDIA),
    ("fetch failed", ErrorKind.NETWORK),
)


def classify_error(exc: BaseException) -> ErrorKind:
    """Map an exception to an ErrorKind.

    Typed information (exception class, API error reason) wins; the message
    text is inspected only as a last resort.
    """
    if isinstance(exc, InvalidRequestError):
        return ErrorKind.INVALID_REQUEST
    if isinstance(exc, EmptyResponseError):
        return ErrorKind.EMPTY_RESPONSE
    if isinstance(exc, UpstreamUnreachableError):
        return ErrorKind.NETWORK
    if isinstance(exc, UpstreamAPIError) and exc.reason == "API_KEY_INVALID":
        return ErrorKind.INVALID_CREDENTIAL

    text = str(exc)
    for hint, kind in _MESSAGE_HINTS:
        if hint.lower() in text.lower():
            return kind
    return ErrorKind.OTHER


def user_message(exc: BaseException) -> str:
    """Return the human-readable message for a failed analysis."""
    if isinstance(exc, AudioEncodingError):
        return GENERIC_FAILURE_MESSAGE

    kind = classify_error(exc)
    if kind in _KIND_MESSAGES:
        return _KIND_MESSAGES[kind]

    message = getattr(exc, "message", None) or str(exc)
    return message or UNKNOWN_FAILURE_MESSAGE
