"""Audio intake: uploaded files and their base64 encoding for transmission."""

import asyncio
import base64
import logging
import mimetypes
from dataclasses import dataclass
from pathlib import Path

from meeting_digest.core.exceptions import AudioEncodingError

logger = logging.getLogger(__name__)


def guess_mime_type(filename: str, declared: str | None = None) -> str:
    """Pick the media type for a file.

    The declared type wins unless it is missing or the generic
    application/octet-stream; then the filename extension is consulted.
    An empty string is returned when nothing is known.
    """
    if declared and declared != "application/octet-stream":
        return declared
    guessed, _ = mimetypes.guess_type(filename)
    return guessed or declared or ""


@dataclass(frozen=True)
class AudioFile:
    """An uploaded audio file that has not been encoded yet."""

    name: str
    content: bytes
    mime_type: str

    @classmethod
    def from_path(cls, path: str | Path) -> "AudioFile":
        """Read an audio file from disk."""
        path = Path(path)
        return cls(
            name=path.name,
            content=path.read_bytes(),
            mime_type=guess_mime_type(path.name),
        )

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True)
class AudioInput:
    """Encoded audio payload ready to be sent inline."""

    data: str
    mime_type: str

    def to_part(self) -> dict:
        """Return the inlineData content part for the generateContent API."""
        return {"inlineData": {"mimeType": self.mime_type, "data": self.data}}


def encode_audio(audio_file: AudioFile) -> AudioInput:
    """Base64-encode one audio file.

    Raises:
        AudioEncodingError: If the content cannot be encoded.
    """
    try:
        data = base64.b64encode(audio_file.content).decode("ascii")
    except (TypeError, ValueError) as e:
        raise AudioEncodingError(
            f"Failed to encode {audio_file.name}: {e}",
            filename=audio_file.name,
        ) from e
    return AudioInput(data=data, mime_type=audio_file.mime_type)


async def encode_audio_files(audio_files: list[AudioFile]) -> list[AudioInput]:
    """Encode all files off the event loop, preserving their order.

    Args:
        audio_files: Files in upload order.

    Returns:
        One AudioInput per file, in the same order.

    Raises:
        AudioEncodingError: If any file fails to encode.
    """
    logger.debug("Encoding %d audio file(s)", len(audio_files))
    return list(
        await asyncio.gather(*(asyncio.to_thread(encode_audio, f) for f in audio_files))
    )
