"""Data model shared by the parser, the state machine and the chat."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Literal


@dataclass(frozen=True)
class AnalysisResult:
    """Structured summary of one analysis run."""

    summary_3_lines: list[str] = field(default_factory=list)
    detailed_summary: str = ""


class ProcessingStatus(str, Enum):
    """Lifecycle stage of an analysis run."""

    IDLE = "idle"
    UPLOADING = "uploading"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass(frozen=True)
class ProcessingState:
    """The single live processing state plus its display message."""

    status: ProcessingStatus = ProcessingStatus.IDLE
    message: str = ""

    @property
    def is_busy(self) -> bool:
        """True while an analysis is in flight."""
        return self.status in (ProcessingStatus.UPLOADING, ProcessingStatus.PROCESSING)


@dataclass(frozen=True)
class ChatMessage:
    role: Literal["user", "model"]
    text: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: str = field(default_factory=lambda: uuid.uuid4().hex[:12])
