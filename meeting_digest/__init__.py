"""Meeting Digest - summarize meeting recordings with a hosted generative model.

Upload one or more meeting recordings, get a three-line summary plus a
detailed narrative, then ask follow-up questions grounded in the same audio.

Usage:
    >>> from meeting_digest import AnalysisWorkspace, AudioFile
    >>>
    >>> workspace = AnalysisWorkspace(credential="<api key>")
    >>> workspace.add_files([AudioFile.from_path("standup.m4a")])
    >>> state = await workspace.analyze()
    >>> print(workspace.result.summary_3_lines)
    >>> reply = await workspace.ask("결정된 사항이 뭐야?")
"""

__version__ = "0.1.0"

# Public library API exports
from meeting_digest.core.audio import AudioFile, AudioInput, encode_audio_files
from meeting_digest.core.chat import ChatSession, create_chat_session
from meeting_digest.core.config import SummarizerConfig
from meeting_digest.core.export import export_filename, render_export
from meeting_digest.core.models import AnalysisResult, ChatMessage, ProcessingState, ProcessingStatus
from meeting_digest.core.operations import summarize_audio
from meeting_digest.core.parser import parse_response, strip_list_marker
from meeting_digest.core.state import AnalysisWorkspace

# Export exceptions for library users
from meeting_digest.core.exceptions import (
    AudioEncodingError,
    ChatError,
    ConfigurationError,
    EmptyResponseError,
    ErrorKind,
    InvalidRequestError,
    MissingCredentialError,
    NoAudioError,
    SummarizerError,
    UpstreamAPIError,
    UpstreamError,
    UpstreamTimeoutError,
    UpstreamUnreachableError,
    classify_error,
    user_message,
)

__all__ = [
    "__version__",
    # Configuration
    "SummarizerConfig",
    # Data model
    "AudioFile",
    "AudioInput",
    "AnalysisResult",
    "ChatMessage",
    "ProcessingState",
    "ProcessingStatus",
    # Operations
    "AnalysisWorkspace",
    "ChatSession",
    "create_chat_session",
    "encode_audio_files",
    "export_filename",
    "parse_response",
    "render_export",
    "strip_list_marker",
    "summarize_audio",
    # Exceptions
    "SummarizerError",
    "AudioEncodingError",
    "ChatError",
    "ConfigurationError",
    "EmptyResponseError",
    "InvalidRequestError",
    "MissingCredentialError",
    "NoAudioError",
    "UpstreamError",
    "UpstreamAPIError",
    "UpstreamTimeoutError",
    "UpstreamUnreachableError",
    "ErrorKind",
    "classify_error",
    "user_message",
]
