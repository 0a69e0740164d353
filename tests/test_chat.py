"""Tests for the follow-up chat session."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest

from meeting_digest import AudioInput, ChatError, SummarizerConfig, UpstreamUnreachableError, create_chat_session
from meeting_digest.core import prompts


@pytest.fixture
def config():
    return SummarizerConfig(api_base_url="http://test-gemini:8080", model="test-model")


@pytest.fixture
def session(config):
    return create_chat_session("test-key", [AudioInput(data="AAAA", mime_type="audio/mpeg")], config)


def _reply(text: str) -> httpx.Response:
    return httpx.Response(200, json={"candidates": [{"content": {"parts": [{"text": text}]}}]})


def test_history_seeded_with_audio_and_priming(session, config):
    history = session.history

    assert len(history) == 2
    assert history[0]["role"] == "user"
    assert history[0]["parts"][0] == {"inlineData": {"mimeType": "audio/mpeg", "data": "AAAA"}}
    assert history[0]["parts"][-1] == {"text": config.chat_priming_prompt}
    assert history[1] == {"role": "model", "parts": [{"text": config.chat_priming_reply}]}
    assert session.turn_count == 0


def test_history_is_a_copy(session):
    session.history.append({"role": "user", "parts": []})

    assert len(session.history) == 2


@pytest.mark.asyncio
async def test_send_message_resends_history(session):
    with patch("meeting_digest.core.chat.post_generate_content", new_callable=AsyncMock) as mock_post:
        mock_post.return_value = _reply("결정 사항은 두 가지입니다.")

        reply = await session.send_message("결정된 사항이 뭐야?")

    assert reply == "결정 사항은 두 가지입니다."
    request_body, api_key, _ = mock_post.call_args[0]
    assert api_key == "test-key"
    contents = request_body["contents"]
    assert len(contents) == 3
    assert contents[0]["parts"][0]["inlineData"]["data"] == "AAAA"
    assert contents[-1] == {"role": "user", "parts": [{"text": "결정된 사항이 뭐야?"}]}


@pytest.mark.asyncio
async def test_successful_turns_extend_history(session):
    with patch("meeting_digest.core.chat.post_generate_content", new_callable=AsyncMock) as mock_post:
        mock_post.side_effect = [_reply("first answer"), _reply("second answer")]

        await session.send_message("q1")
        await session.send_message("q2")

    assert session.turn_count == 2
    second_request = mock_post.call_args_list[1][0][0]["contents"]
    assert second_request[2] == {"role": "user", "parts": [{"text": "q1"}]}
    assert second_request[3] == {"role": "model", "parts": [{"text": "first answer"}]}
    assert second_request[4] == {"role": "user", "parts": [{"text": "q2"}]}


@pytest.mark.asyncio
async def test_empty_reply_uses_placeholder(session):
    with patch("meeting_digest.core.chat.post_generate_content", new_callable=AsyncMock) as mock_post:
        mock_post.return_value = _reply("")

        reply = await session.send_message("q")

    assert reply == prompts.CHAT_EMPTY_REPLY
    assert session.history[-1] == {"role": "model", "parts": [{"text": prompts.CHAT_EMPTY_REPLY}]}


@pytest.mark.asyncio
async def test_transport_failure_raises_chat_error_and_keeps_history(session):
    with patch("meeting_digest.core.chat.post_generate_content", new_callable=AsyncMock) as mock_post:
        mock_post.side_effect = UpstreamUnreachableError("Connection to upstream failed")

        with pytest.raises(ChatError) as exc_info:
            await session.send_message("q")

    assert exc_info.value.message == prompts.CHAT_TURN_FAILED
    assert isinstance(exc_info.value.__cause__, UpstreamUnreachableError)
    assert session.turn_count == 0
    assert len(session.history) == 2


@pytest.mark.asyncio
async def test_upstream_error_status_raises_chat_error(session):
    with patch("meeting_digest.core.chat.post_generate_content", new_callable=AsyncMock) as mock_post:
        mock_post.return_value = httpx.Response(429, json={"error": {"message": "Quota exceeded"}})

        with pytest.raises(ChatError):
            await session.send_message("q")

    assert session.turn_count == 0
