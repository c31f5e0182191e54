from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from bard.errors import EncodingError, ValidationError

VOCALS_WEIGHT = 0.7
MUSIC_WEIGHT = 0.3


def _optional_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass(frozen=True)
class SongRequest:
    topic: str
    style: Optional[str] = None
    mood: Optional[str] = None

    def __post_init__(self) -> None:
        topic = (self.topic or "").strip()
        if not topic:
            raise ValidationError("topic must be a non-empty string")
        object.__setattr__(self, "topic", topic)
        object.__setattr__(self, "style", _optional_text(self.style))
        object.__setattr__(self, "mood", _optional_text(self.mood))


@dataclass
class AudioBuffer:
    """Decoded PCM audio, one row of float samples per channel.

    ``samples`` has shape (channels, frames), so every channel has the same
    length. Values are not clamped here; the encoder clamps on the way out.
    """

    samples: np.ndarray
    sample_rate: int

    def __post_init__(self) -> None:
        samples = np.asarray(self.samples, dtype=np.float32)
        if samples.ndim != 2:
            raise EncodingError(f"samples must be 2-D (channels, frames), got {samples.ndim}-D")
        if samples.shape[0] < 1:
            raise EncodingError("AudioBuffer needs at least one channel")
        if int(self.sample_rate) <= 0:
            raise EncodingError(f"sample_rate must be positive, got {self.sample_rate}")
        self.samples = samples
        self.sample_rate = int(self.sample_rate)

    @classmethod
    def from_channels(cls, channels: Sequence[Sequence[float]], sample_rate: int) -> "AudioBuffer":
        lengths = {len(ch) for ch in channels}
        if len(lengths) > 1:
            raise EncodingError(f"channel lengths differ: {sorted(lengths)}")
        return cls(np.array([list(ch) for ch in channels], dtype=np.float32), sample_rate)

    @classmethod
    def silence(cls, channels: int, frames: int, sample_rate: int) -> "AudioBuffer":
        return cls(np.zeros((channels, frames), dtype=np.float32), sample_rate)

    @property
    def channel_count(self) -> int:
        return int(self.samples.shape[0])

    @property
    def frame_count(self) -> int:
        return int(self.samples.shape[1])

    @property
    def duration(self) -> float:
        return self.frame_count / self.sample_rate


@dataclass
class SongArtifacts:
    """Everything one request managed to produce. Lyrics are always present."""

    lyrics: str
    vocals: Optional[bytes] = None
    music: Optional[bytes] = None
    mix: Optional[bytes] = None

    def layers(self) -> List[Tuple[str, bytes]]:
        layers: List[Tuple[str, bytes]] = []
        if self.vocals is not None:
            layers.append(("Vocals", self.vocals))
        if self.music is not None:
            layers.append(("Music", self.music))
        if self.mix is not None:
            layers.append(("Final Mix", self.mix))
        return layers


@dataclass(frozen=True)
class SongResult:
    artifacts: SongArtifacts
    summary: str


@dataclass(frozen=True)
class SavedSongFiles:
    song_dir: str
    lyrics_path: str
    vocals_path: Optional[str] = None
    music_path: Optional[str] = None
    mix_path: Optional[str] = None
