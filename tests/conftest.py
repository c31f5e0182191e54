"""Test configuration and fixtures.

Provides reusable fixtures for:
- Temporary output directories
- In-memory lyrics, vocals and music providers
- WAV payloads built with the project's own encoder
"""

import threading
from pathlib import Path
import tempfile
from typing import Dict, List, Optional

import numpy as np
import pytest

from bard.config import BardConfig
from bard.types import AudioBuffer
from bard.wav import encode_wav

SAMPLE_LYRICS = """

  Verse 1:
  Running down the open road

  Chasing every dream I've known

  Chorus:
  We will rise, we will fly
"""


class FakeLyricsProvider:
    def __init__(self, text: str = SAMPLE_LYRICS, error: Optional[BaseException] = None):
        self.text = text
        self.error = error
        self.calls: List[Dict] = []

    def generate_lyrics(self, prompt, max_length, temperature):
        self.calls.append({"prompt": prompt, "max_length": max_length, "temperature": temperature})
        if self.error is not None:
            raise self.error
        return self.text


class FakeVocalsProvider:
    """Returns the line text as bytes and records every line it saw."""

    def __init__(self, fail_on: Optional[str] = None):
        self.fail_on = fail_on
        self.lines: List[str] = []
        self._lock = threading.Lock()

    def synthesize(self, line):
        with self._lock:
            self.lines.append(line)
        if self.fail_on is not None and self.fail_on in line:
            raise RuntimeError(f"synthesis failed for {line!r}")
        return line.encode("utf-8") + b"|"


class FakeMusicProvider:
    def __init__(self, payload: bytes = b"", error: Optional[BaseException] = None):
        self.payload = payload or tone_wav(frames=800, channels=2)
        self.error = error
        self.prompts: List[str] = []

    def generate_music(self, prompt):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.payload


def tone_wav(frames: int = 400, channels: int = 1, sample_rate: int = 16000, amplitude: float = 0.5) -> bytes:
    t = np.arange(frames, dtype=np.float32) / sample_rate
    wave = amplitude * np.sin(2 * np.pi * 440.0 * t)
    return encode_wav(AudioBuffer(np.tile(wave, (channels, 1)), sample_rate))


def fake_decoder(data: bytes) -> AudioBuffer:
    """Decode-free stand-in: one channel, one frame per byte, quarter amplitude."""
    return AudioBuffer(np.full((1, len(data)), 0.25, dtype=np.float32), 16000)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def config(temp_dir):
    return BardConfig(hf_token="hf_test", output_dir=str(temp_dir / "songs"), vocal_workers=4)
