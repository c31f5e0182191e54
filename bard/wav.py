from __future__ import annotations

import io
import struct

import numpy as np
import soundfile as sf

from bard.errors import AudioDecodeError, EncodingError
from bard.logging_utils import get_logger
from bard.types import AudioBuffer

log = get_logger(__name__)

WAV_HEADER_SIZE = 44
BITS_PER_SAMPLE = 16

_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")


def quantize(samples: np.ndarray) -> np.ndarray:
    """Clamp to [-1, 1] and scale to int16.

    Negative values scale by 0x8000 and non-negative ones by 0x7fff, so -1.0
    lands on -32768 and 1.0 on 32767. Fractions truncate toward zero.
    """
    clamped = np.clip(np.asarray(samples, dtype=np.float64), -1.0, 1.0)
    scaled = np.where(clamped < 0, clamped * 0x8000, clamped * 0x7FFF)
    return np.trunc(scaled).astype("<i2")


def wav_header(channels: int, sample_rate: int, frames: int) -> bytes:
    data_len = frames * channels * 2
    return _HEADER.pack(
        b"RIFF",
        36 + data_len,
        b"WAVE",
        b"fmt ",
        16,
        1,  # PCM
        channels,
        sample_rate,
        sample_rate * 2,  # byte rate, mono convention kept for output compatibility
        channels * 2,
        BITS_PER_SAMPLE,
        b"data",
        data_len,
    )


def encode_wav(buffer: AudioBuffer) -> bytes:
    """Serialize an AudioBuffer as 16-bit PCM WAV with frame-major interleaving."""
    samples = buffer.samples
    if samples.ndim != 2 or samples.shape[0] < 1:
        raise EncodingError(f"inconsistent AudioBuffer shape {samples.shape}")
    if buffer.sample_rate <= 0:
        raise EncodingError(f"sample_rate must be positive, got {buffer.sample_rate}")
    channels, frames = samples.shape
    # (channels, frames) -> (frames, channels) puts frame 0 of every channel first
    pcm = quantize(samples.T).tobytes()
    return wav_header(channels, buffer.sample_rate, frames) + pcm


def decode_audio(data: bytes) -> AudioBuffer:
    """Decode WAV/FLAC/OGG bytes into an AudioBuffer or raise AudioDecodeError."""
    if not data:
        raise AudioDecodeError("cannot decode empty audio payload")
    try:
        frames, sample_rate = sf.read(io.BytesIO(data), dtype="float32", always_2d=True)
    except (RuntimeError, TypeError, ValueError) as e:
        log.error("audio decode failed", extra={"bytes": len(data), "error": str(e)})
        raise AudioDecodeError(f"unsupported or malformed audio ({len(data)} bytes): {e}") from e
    buffer = AudioBuffer(frames.T, sample_rate)
    log.debug("decoded audio", extra={
        "channels": buffer.channel_count, "frames": buffer.frame_count, "sample_rate": buffer.sample_rate
    })
    return buffer
