"""Request/response schemas for the service."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from meeting_digest import AnalysisResult, AnalysisWorkspace, AudioFile, ChatMessage


class ErrorDetail(BaseModel):
    """Error detail structure."""

    type: str = Field(description="Error type identifier")
    message: str = Field(description="Human-readable error message")


class ErrorResponse(BaseModel):
    """Structured error response format."""

    error: ErrorDetail = Field(description="Error details")


class FileInfo(BaseModel):
    index: int
    name: str
    mime_type: str
    size: int

    @classmethod
    def from_audio_file(cls, index: int, audio_file: AudioFile) -> "FileInfo":
        return cls(index=index, name=audio_file.name, mime_type=audio_file.mime_type, size=audio_file.size)


class AnalysisResultSchema(BaseModel):
    """Parsed summary returned to the client."""

    summary_3_lines: list[str] = Field(description="Up to three key conclusions")
    detailed_summary: str = Field(description="Narrative summary of the meeting")

    @classmethod
    def from_result(cls, result: AnalysisResult) -> "AnalysisResultSchema":
        return cls(summary_3_lines=list(result.summary_3_lines), detailed_summary=result.detailed_summary)


class ChatMessageSchema(BaseModel):
    id: str
    role: Literal["user", "model"]
    text: str
    timestamp: datetime

    @classmethod
    def from_message(cls, message: ChatMessage) -> "ChatMessageSchema":
        return cls(id=message.id, role=message.role, text=message.text, timestamp=message.timestamp)


class StateResponse(BaseModel):
    """Full snapshot of the workspace."""

    status: str = Field(description="idle, uploading, processing, completed or error")
    message: str = Field(description="Display message for the status")
    has_credential: bool
    files: list[FileInfo]
    result: AnalysisResultSchema | None = None
    messages: list[ChatMessageSchema] = Field(default_factory=list)
    chat_turns: int = Field(default=0, description="Completed question/answer pairs in the current chat")

    @classmethod
    def from_workspace(cls, workspace: AnalysisWorkspace) -> "StateResponse":
        result = workspace.result
        return cls(
            status=workspace.state.status.value,
            message=workspace.state.message,
            has_credential=bool(workspace.credential),
            files=[FileInfo.from_audio_file(i, f) for i, f in enumerate(workspace.files)],
            result=AnalysisResultSchema.from_result(result) if result is not None else None,
            messages=[ChatMessageSchema.from_message(m) for m in workspace.messages],
            chat_turns=workspace.chat_session.turn_count if workspace.chat_session is not None else 0,
        )


class CredentialRequest(BaseModel):
    api_key: str = Field(description="Credential for the generative-language API")


class PreferencesResponse(BaseModel):
    """Preferences as exposed to the client; the credential itself is never echoed."""

    dark_mode: bool
    has_credential: bool


class PreferencesUpdate(BaseModel):
    dark_mode: bool


class ChatRequest(BaseModel):
    message: str = Field(description="Question about the analyzed meeting")


class ChatResponse(BaseModel):
    """Reply to one chat turn plus the whole log."""

    reply: ChatMessageSchema | None = Field(default=None, description="None when the turn was ignored")
    messages: list[ChatMessageSchema]
