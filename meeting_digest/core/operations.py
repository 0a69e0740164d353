"""High-level operations API for the meeting digest library."""

import json
import logging
from typing import Any

from meeting_digest.core.audio import AudioInput
from meeting_digest.core.client import extract_text, post_generate_content, raise_for_upstream_error
from meeting_digest.core.config import SummarizerConfig
from meeting_digest.core.exceptions import (
    EmptyResponseError,
    InvalidRequestError,
    MissingCredentialError,
    NoAudioError,
)
from meeting_digest.core.models import AnalysisResult
from meeting_digest.core.parser import parse_response

logger = logging.getLogger(__name__)


def build_summary_request(audio_inputs: list[AudioInput], config: SummarizerConfig) -> dict[str, Any]:
    """Build the generateContent body: every audio part, then the summary prompt."""
    parts: list[dict[str, Any]] = [audio.to_part() for audio in audio_inputs]
    parts.append({"text": config.summary_prompt})

    return {
        "systemInstruction": {"parts": [{"text": config.system_instruction}]},
        "contents": [{"role": "user", "parts": parts}],
        "generationConfig": {"temperature": config.temperature},
    }


def read_reply_text(upstream_response, upstream: str | None = None) -> str:
    """Raise for API errors and return the reply text of a generateContent call."""
    raise_for_upstream_error(upstream_response, upstream)
    try:
        return extract_text(upstream_response.json())
    except (json.JSONDecodeError, ValueError, AttributeError, TypeError) as e:
        logger.error(f"Failed to parse upstream response: {e}")
        raise InvalidRequestError("Upstream returned an unexpected response structure") from e


async def summarize_audio(
    api_key: str,
    audio_inputs: list[AudioInput],
    config: SummarizerConfig,
) -> AnalysisResult:
    """Summarize one or more meeting recordings into an AnalysisResult.

    Raises:
        MissingCredentialError: No credential was given.
        NoAudioError: The audio list is empty.
        UpstreamError: The API could not be reached or answered with an error.
        EmptyResponseError: The API returned no text.
    """
    if not api_key:
        raise MissingCredentialError("API Key가 필요합니다.")
    if not audio_inputs:
        raise NoAudioError("분석할 오디오 파일이 없습니다.")

    request_body = build_summary_request(audio_inputs, config)
    logger.info("Requesting summary of %d audio file(s) from %s", len(audio_inputs), config.model)

    upstream_response = await post_generate_content(request_body, api_key, config)
    text = read_reply_text(upstream_response, config.api_base_url)

    if not text:
        raise EmptyResponseError("AI가 응답을 생성하지 못했습니다. (빈 응답)")

    return parse_response(
        text,
        three_line_marker=config.three_line_marker,
        detailed_marker=config.detailed_marker,
    )
