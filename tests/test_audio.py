"""Tests for audio intake and encoding."""

import base64
from unittest.mock import patch

import pytest

from meeting_digest import AudioEncodingError, AudioFile, AudioInput, encode_audio_files
from meeting_digest.core.audio import encode_audio, guess_mime_type


# --- Media type ---


def test_declared_type_wins():
    assert guess_mime_type("call.bin", "audio/webm") == "audio/webm"


def test_octet_stream_falls_back_to_extension():
    assert guess_mime_type("standup.mp3", "application/octet-stream") == "audio/mpeg"


def test_missing_declared_type_uses_extension():
    assert guess_mime_type("standup.mp3") == "audio/mpeg"


def test_unknown_extension_yields_empty():
    assert guess_mime_type("recording.unknownext") == ""


def test_unknown_extension_keeps_octet_stream():
    assert guess_mime_type("recording.unknownext", "application/octet-stream") == "application/octet-stream"


# --- AudioFile ---


def test_from_path_reads_content(tmp_path):
    path = tmp_path / "weekly.mp3"
    path.write_bytes(b"ID3fake-audio")

    audio_file = AudioFile.from_path(path)

    assert audio_file.name == "weekly.mp3"
    assert audio_file.content == b"ID3fake-audio"
    assert audio_file.mime_type == "audio/mpeg"
    assert audio_file.size == 13


def test_from_path_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        AudioFile.from_path(tmp_path / "missing.mp3")


# --- Encoding ---


def test_encode_audio_base64():
    audio_input = encode_audio(AudioFile(name="a.mp3", content=b"\x00\x01\x02abc", mime_type="audio/mpeg"))

    assert audio_input == AudioInput(data=base64.b64encode(b"\x00\x01\x02abc").decode("ascii"), mime_type="audio/mpeg")


def test_encode_empty_file():
    assert encode_audio(AudioFile(name="a.mp3", content=b"", mime_type="audio/mpeg")).data == ""


def test_encode_failure_raises():
    audio_file = AudioFile(name="broken.mp3", content=b"x", mime_type="audio/mpeg")

    with patch("meeting_digest.core.audio.base64.b64encode", side_effect=TypeError("bad bytes")):
        with pytest.raises(AudioEncodingError) as exc_info:
            encode_audio(audio_file)

    assert exc_info.value.filename == "broken.mp3"
    assert "broken.mp3" in exc_info.value.message


@pytest.mark.asyncio
async def test_encode_audio_files_preserves_order():
    files = [
        AudioFile(name=f"part{i}.mp3", content=f"chunk-{i}".encode(), mime_type="audio/mpeg")
        for i in range(5)
    ]

    encoded = await encode_audio_files(files)

    assert [base64.b64decode(e.data).decode() for e in encoded] == [f"chunk-{i}" for i in range(5)]


@pytest.mark.asyncio
async def test_encode_audio_files_propagates_failure():
    files = [AudioFile(name="a.mp3", content=b"x", mime_type="audio/mpeg")]

    with patch("meeting_digest.core.audio.base64.b64encode", side_effect=ValueError("nope")):
        with pytest.raises(AudioEncodingError):
            await encode_audio_files(files)


def test_to_part_shape():
    assert AudioInput(data="QUJD", mime_type="audio/wav").to_part() == {
        "inlineData": {"mimeType": "audio/wav", "data": "QUJD"}
    }
