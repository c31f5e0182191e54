"""Tests for the fixed 70/30 vocals/music blend."""

import struct

import numpy as np
import pytest

from bard.errors import AudioDecodeError, AudioMixError
from bard.mixer import AudioMixer, mix_buffers
from bard.types import MUSIC_WEIGHT, VOCALS_WEIGHT, AudioBuffer
from bard.wav import WAV_HEADER_SIZE, decode_audio, quantize

from conftest import tone_wav


def _random_buffer(channels, frames, sample_rate=44100, seed=0):
    rng = np.random.default_rng(seed)
    return AudioBuffer(rng.uniform(-1.0, 1.0, size=(channels, frames)), sample_rate)


def test_weights_sum_to_one():
    assert VOCALS_WEIGHT == 0.7
    assert MUSIC_WEIGHT == 0.3
    assert VOCALS_WEIGHT + MUSIC_WEIGHT == pytest.approx(1.0)


class TestMixBuffers:
    def test_wider_shorter_vocals_with_narrower_longer_music(self):
        vocals = _random_buffer(4, 1000, seed=1)
        music = _random_buffer(2, 1500, seed=2)

        mixed = mix_buffers(vocals, music)

        assert mixed.channel_count == 4
        assert mixed.frame_count == 1500
        assert mixed.sample_rate == 44100
        # overlap: both layers contribute
        assert np.allclose(mixed.samples[:2, :1000],
                           0.7 * vocals.samples[:2] + 0.3 * music.samples[:, :1000], atol=1e-6)
        # vocals silent-padded past sample 1000
        assert np.allclose(mixed.samples[:2, 1000:], 0.3 * music.samples[:, 1000:], atol=1e-6)
        # music has no channels 2-3, so only vocals are heard there
        assert np.allclose(mixed.samples[2:, :1000], 0.7 * vocals.samples[2:], atol=1e-6)
        # channels 2-3 past sample 1000: 0.7 * 0 + 0.3 * 0
        assert np.all(mixed.samples[2:, 1000:] == 0.0)

    def test_padding_never_loops_shorter_input(self):
        vocals = AudioBuffer.from_channels([[1.0, 1.0]], sample_rate=8000)
        music = AudioBuffer.silence(1, 6, 8000)
        mixed = mix_buffers(vocals, music)
        assert mixed.samples[0].tolist() == pytest.approx([0.7, 0.7, 0.0, 0.0, 0.0, 0.0])

    def test_blend_quantizes_like_double_precision_formula(self):
        rng = np.random.default_rng(7)
        pcm = rng.integers(-32768, 32768, size=(2, 44100))
        decoded = (pcm / 32768.0).astype(np.float32)
        vocals = AudioBuffer(decoded[:1], 44100)
        music = AudioBuffer(decoded[1:], 44100)

        mixed = mix_buffers(vocals, music)

        expected = (decoded[0].astype(np.float64) * 0.70
                    + decoded[1].astype(np.float64) * 0.30).astype(np.float32)
        assert mixed.samples.dtype == np.float32
        assert np.array_equal(quantize(mixed.samples[0]), quantize(expected))

    def test_no_normalization_after_blend(self):
        vocals = AudioBuffer.from_channels([[1.0]], sample_rate=8000)
        music = AudioBuffer.from_channels([[1.0]], sample_rate=8000)
        assert mix_buffers(vocals, music).samples[0, 0] == pytest.approx(1.0)

    def test_sample_rate_mismatch_is_rejected(self):
        vocals = AudioBuffer.silence(1, 10, 22050)
        music = AudioBuffer.silence(1, 10, 44100)
        with pytest.raises(AudioMixError, match="sample rate mismatch"):
            mix_buffers(vocals, music)


class TestAudioMixer:
    def test_mix_returns_wav_with_combined_shape(self):
        buffers = {
            b"vocals": AudioBuffer.from_channels([[0.5, 0.5, 0.5]], sample_rate=8000),
            b"music": AudioBuffer.from_channels([[1.0] * 5, [-1.0] * 5], sample_rate=8000),
        }
        mixer = AudioMixer(decoder=buffers.__getitem__)

        data = mixer.mix(b"vocals", b"music")

        channels, rate = struct.unpack_from("<HI", data, 22)
        assert channels == 2
        assert rate == 8000
        assert struct.unpack_from("<I", data, 40)[0] == 5 * 2 * 2
        pcm = np.frombuffer(data[WAV_HEADER_SIZE:], dtype="<i2").reshape(5, 2)
        # frame 0: left 0.35 + 0.3, right 0 - 0.3
        assert pcm[0, 0] == int(0.65 * 32767)
        assert pcm[0, 1] == int(-0.3 * 32768)
        # frame 4: vocals exhausted
        assert pcm[4, 0] == int(0.3 * 32767)

    def test_real_decoder_round_trip(self):
        mixer = AudioMixer()
        data = mixer.mix(tone_wav(frames=300), tone_wav(frames=500, amplitude=0.2))
        mixed = decode_audio(data)
        assert mixed.channel_count == 1
        assert mixed.frame_count == 500
        assert mixed.sample_rate == 16000

    def test_decode_failure_propagates(self):
        mixer = AudioMixer()
        with pytest.raises(AudioDecodeError):
            mixer.mix(b"", tone_wav())
