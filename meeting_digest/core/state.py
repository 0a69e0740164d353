"""Processing state machine for one user's analysis workspace.

The workspace owns the credential, the uploaded files, the live
ProcessingState, the latest AnalysisResult and the follow-up chat. Any change
to the file list returns the machine to idle and drops the result and the
chat, because both are only valid for the exact files that produced them.

Replies that arrive after such a change are discarded: every mutation bumps a
generation counter and an in-flight call only applies its outcome when the
counter still matches.
"""

import logging

from meeting_digest.core import prompts
from meeting_digest.core.audio import AudioFile, encode_audio_files
from meeting_digest.core.chat import ChatSession, create_chat_session
from meeting_digest.core.config import SummarizerConfig
from meeting_digest.core.exceptions import UNKNOWN_FAILURE_MESSAGE, ChatError, SummarizerError, user_message
from meeting_digest.core.models import AnalysisResult, ChatMessage, ProcessingState, ProcessingStatus
from meeting_digest.core.operations import summarize_audio

logger = logging.getLogger(__name__)

PROCESSING_MESSAGE = "Gemini AI가 모든 회의 내용을 통합 분석 중입니다..."
COMPLETED_MESSAGE = "분석 완료"


def uploading_message(file_count: int) -> str:
    return f"{file_count}개의 오디오 파일 준비 중..."


class AnalysisWorkspace:
    """Single source of truth for the analysis lifecycle."""

    def __init__(self, config: SummarizerConfig | None = None, credential: str = ""):
        self.config = config or SummarizerConfig()
        self.credential = credential
        self._files: list[AudioFile] = []
        self._state = ProcessingState()
        self._result: AnalysisResult | None = None
        self._chat: ChatSession | None = None
        self._messages: list[ChatMessage] = []
        self._chat_pending = False
        self._generation = 0

    # -- read-only views -------------------------------------------------

    @property
    def state(self) -> ProcessingState:
        return self._state

    @property
    def files(self) -> tuple[AudioFile, ...]:
        return tuple(self._files)

    @property
    def result(self) -> AnalysisResult | None:
        return self._result

    @property
    def chat_session(self) -> ChatSession | None:
        return self._chat

    @property
    def messages(self) -> tuple[ChatMessage, ...]:
        return tuple(self._messages)

    @property
    def is_ready(self) -> bool:
        """A credential and at least one file are present."""
        return bool(self.credential) and bool(self._files)

    @property
    def chat_pending(self) -> bool:
        return self._chat_pending

    # -- input mutations ---------------------------------------------------

    def set_credential(self, credential: str) -> None:
        """Replace the credential. The current result stays valid."""
        self.credential = credential.strip()

    def add_files(self, audio_files: list[AudioFile]) -> None:
        """Append files in order and return to idle."""
        if not audio_files:
            return
        self._files.extend(audio_files)
        logger.info("Added %d file(s); %d total", len(audio_files), len(self._files))
        self._invalidate()

    def remove_file(self, index: int) -> AudioFile:
        """Remove the file at index and return to idle.

        Raises:
            IndexError: If index is out of range.
        """
        if not 0 <= index < len(self._files):
            raise IndexError(f"No file at index {index}")
        removed = self._files.pop(index)
        logger.info("Removed file %s; %d left", removed.name, len(self._files))
        self._invalidate()
        return removed

    def reset(self) -> None:
        """Drop every file, the result and the chat."""
        self._files.clear()
        logger.info("Workspace reset")
        self._invalidate()

    def _invalidate(self) -> None:
        self._clear_context()
        self._state = ProcessingState()

    def _clear_context(self) -> int:
        """Drop the result and the chat and start a new generation."""
        self._generation += 1
        self._result = None
        self._chat = None
        self._messages = []
        self._chat_pending = False
        return self._generation

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    # -- analysis ----------------------------------------------------------

    async def analyze(self) -> ProcessingState:
        """
        Run one analysis over the current files.

        Does nothing when the credential or the files are missing, or when an
        analysis is already in flight. Failures end in the error state; they
        are never raised to the caller.

        Returns:
            The state after the run (or the unchanged state when ignored).
        """
        if not self.is_ready or self._state.is_busy:
            logger.debug("Analyze ignored in state %s", self._state.status.value)
            return self._state

        generation = self._clear_context()
        audio_files = list(self._files)
        self._state = ProcessingState(ProcessingStatus.UPLOADING, uploading_message(len(audio_files)))

        try:
            audio_inputs = await encode_audio_files(audio_files)
            if not self._is_current(generation):
                return self._discard("encoding")

            self._state = ProcessingState(ProcessingStatus.PROCESSING, PROCESSING_MESSAGE)
            result = await summarize_audio(self.credential, audio_inputs, self.config)
            if not self._is_current(generation):
                return self._discard("summary")

            session = create_chat_session(self.credential, audio_inputs, self.config)

        except SummarizerError as e:
            if not self._is_current(generation):
                return self._discard("failure")
            logger.warning(f"Analysis failed: {e}")
            self._state = ProcessingState(ProcessingStatus.ERROR, user_message(e))
            return self._state

        except Exception as e:
            if not self._is_current(generation):
                return self._discard("failure")
            logger.exception(f"Unexpected error during analysis: {e}")
            self._state = ProcessingState(ProcessingStatus.ERROR, str(e) or UNKNOWN_FAILURE_MESSAGE)
            return self._state

        self._result = result
        self._chat = session
        self._messages = [ChatMessage(role="model", text=prompts.CHAT_WELCOME_MESSAGE)]
        self._state = ProcessingState(ProcessingStatus.COMPLETED, COMPLETED_MESSAGE)
        logger.info("Analysis completed with %d summary line(s)", len(result.summary_3_lines))
        return self._state

    def _discard(self, stage: str) -> ProcessingState:
        logger.info("Discarding stale %s from a superseded analysis", stage)
        return self._state

    # -- follow-up chat ------------------------------------------------------

    async def ask(self, text: str) -> ChatMessage | None:
        """
        Run one chat turn against the established context.

        Ignored (returns None) when the text is blank, no context exists, or a
        turn is already in flight. A failed turn appends a fallback reply and
        leaves the processing state and the context untouched.

        Returns:
            The model message appended to the log, or None when ignored.
        """
        if not text.strip() or self._chat is None or self._chat_pending:
            return None

        generation = self._generation
        session = self._chat
        self._messages.append(ChatMessage(role="user", text=text))
        self._chat_pending = True

        try:
            reply_text = await session.send_message(text)
        except ChatError:
            reply_text = prompts.CHAT_FALLBACK_MESSAGE
        finally:
            if self._is_current(generation):
                self._chat_pending = False

        if not self._is_current(generation):
            logger.info("Discarding chat reply for a superseded context")
            return None

        reply = ChatMessage(role="model", text=reply_text)
        self._messages.append(reply)
        return reply
