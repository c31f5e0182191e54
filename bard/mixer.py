from __future__ import annotations

from typing import Callable

import numpy as np

from bard.errors import AudioMixError
from bard.logging_utils import get_logger
from bard.types import MUSIC_WEIGHT, VOCALS_WEIGHT, AudioBuffer
from bard.wav import decode_audio, encode_wav

log = get_logger(__name__)

Decoder = Callable[[bytes], AudioBuffer]


def _padded(buffer: AudioBuffer, channels: int, frames: int) -> np.ndarray:
    """Zero-extend a buffer to (channels, frames). Missing positions are silence."""
    out = np.zeros((channels, frames), dtype=np.float64)
    out[: buffer.channel_count, : buffer.frame_count] = buffer.samples
    return out


def mix_buffers(vocals: AudioBuffer, music: AudioBuffer) -> AudioBuffer:
    """Blend vocals and music at fixed 70/30 weights.

    The result is as long as the longer input and as wide as the wider one.
    Both inputs must share a sample rate; nothing is resampled.
    """
    if vocals.sample_rate != music.sample_rate:
        raise AudioMixError(
            f"sample rate mismatch: vocals {vocals.sample_rate} Hz, music {music.sample_rate} Hz"
        )
    frames = max(vocals.frame_count, music.frame_count)
    channels = max(vocals.channel_count, music.channel_count)
    # blend in float64, round to float32 once
    mixed = (
        _padded(vocals, channels, frames) * VOCALS_WEIGHT
        + _padded(music, channels, frames) * MUSIC_WEIGHT
    )
    return AudioBuffer(mixed.astype(np.float32), vocals.sample_rate)


class AudioMixer:
    """Decode two encoded tracks, blend them and return WAV bytes."""

    def __init__(self, decoder: Decoder = decode_audio) -> None:
        self.decoder = decoder

    def mix(self, vocals: bytes, music: bytes) -> bytes:
        decoded_vocals = self.decoder(vocals)
        decoded_music = self.decoder(music)
        mixed = mix_buffers(decoded_vocals, decoded_music)
        log.info("mixed tracks", extra={
            "channels": mixed.channel_count,
            "frames": mixed.frame_count,
            "sample_rate": mixed.sample_rate,
            "seconds": round(mixed.duration, 3),
        })
        return encode_wav(mixed)
