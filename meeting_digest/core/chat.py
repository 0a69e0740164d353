"""Follow-up chat over the analyzed recordings.

The API is stateless, so the session keeps the conversation history locally
and resends it with every turn. The history is seeded with the audio parts and
a priming exchange, so every answer is grounded in the same recordings that
produced the summary.
"""

import copy
import logging
from typing import Any

from meeting_digest.core import prompts
from meeting_digest.core.audio import AudioInput
from meeting_digest.core.client import post_generate_content
from meeting_digest.core.config import SummarizerConfig
from meeting_digest.core.exceptions import ChatError, SummarizerError
from meeting_digest.core.operations import read_reply_text

logger = logging.getLogger(__name__)


class ChatSession:
    """Conversational context seeded with the analyzed audio."""

    def __init__(self, api_key: str, audio_inputs: list[AudioInput], config: SummarizerConfig):
        self._api_key = api_key
        self._config = config
        seed_parts: list[dict[str, Any]] = [audio.to_part() for audio in audio_inputs]
        seed_parts.append({"text": config.chat_priming_prompt})
        self._history: list[dict[str, Any]] = [
            {"role": "user", "parts": seed_parts},
            {"role": "model", "parts": [{"text": config.chat_priming_reply}]},
        ]

    @property
    def history(self) -> list[dict[str, Any]]:
        """Copy of the turns sent so far, seed included."""
        return copy.deepcopy(self._history)

    @property
    def turn_count(self) -> int:
        """Number of completed question/answer pairs after the seed."""
        return (len(self._history) - 2) // 2

    async def send_message(self, message: str) -> str:
        """
        Send one user turn and return the model's reply.

        The history is extended only when the call succeeds, so a failed turn
        leaves the context exactly as it was.

        Raises:
            ChatError: If the call fails for any reason.
        """
        user_turn = {"role": "user", "parts": [{"text": message}]}
        request_body = {"contents": [*self._history, user_turn]}

        try:
            upstream_response = await post_generate_content(request_body, self._api_key, self._config)
            text = read_reply_text(upstream_response, self._config.api_base_url)
        except SummarizerError as e:
            logger.error(f"Chat turn failed: {e}")
            raise ChatError(prompts.CHAT_TURN_FAILED) from e

        reply = text or prompts.CHAT_EMPTY_REPLY
        self._history.append(user_turn)
        self._history.append({"role": "model", "parts": [{"text": reply}]})
        return reply


def create_chat_session(
    api_key: str,
    audio_inputs: list[AudioInput],
    config: SummarizerConfig,
) -> ChatSession:
    """Create a chat session over the given audio. No request is sent yet."""
    return ChatSession(api_key, audio_inputs, config)
