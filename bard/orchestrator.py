"""End-to-end song generation.

Lyrics are mandatory: if they fail, the request fails. Vocals and music run
concurrently once lyrics exist and are optional: a failure in either is
logged and leaves that layer absent. The mix is attempted only when both
layers exist, and a failed mix leaves vocals and music untouched.
"""

from __future__ import annotations

import concurrent.futures
from typing import Callable, Optional

from bard.config import BardConfig
from bard.errors import ConfigError, EncodingError, LyricsGenerationError
from bard.logging_utils import get_logger
from bard.mixer import AudioMixer
from bard.providers import (
    LyricsProvider,
    MusicProvider,
    VocalsProvider,
    build_lyrics_prompt,
    build_music_prompt,
    format_lyrics,
)
from bard.types import SongArtifacts, SongRequest, SongResult
from bard.vocals import VocalSynthesisJoiner, split_lyric_lines

log = get_logger(__name__)


def size_kb(data: bytes) -> int:
    return int(len(data) / 1024 + 0.5)


def summarize_artifacts(artifacts: SongArtifacts) -> str:
    lines = ["Lyrics:", artifacts.lyrics, "", "Audio Layers:"]
    layers = artifacts.layers()
    if not layers:
        lines.append("- none (lyrics only)")
    for name, data in layers:
        lines.append(f"- {name}: [{size_kb(data)}KB]")
    return "\n".join(lines)


class SongPipeline:
    def __init__(
        self,
        config: BardConfig,
        lyrics_provider: LyricsProvider,
        vocals_provider: VocalsProvider,
        music_provider: MusicProvider,
        joiner: Optional[VocalSynthesisJoiner] = None,
        mixer: Optional[AudioMixer] = None,
    ) -> None:
        for provider, protocol in (
            (lyrics_provider, LyricsProvider),
            (vocals_provider, VocalsProvider),
            (music_provider, MusicProvider),
        ):
            if not isinstance(provider, protocol):
                raise ConfigError(f"{type(provider).__name__} does not implement {protocol.__name__}")
        self.config = config
        self.lyrics_provider = lyrics_provider
        self.music_provider = music_provider
        self.joiner = joiner or VocalSynthesisJoiner(vocals_provider, max_workers=config.vocal_workers)
        self.mixer = mixer or AudioMixer()

    def generate_lyrics(self, request: SongRequest) -> str:
        prompt = build_lyrics_prompt(request.topic, request.style, request.mood)
        try:
            raw = self.lyrics_provider.generate_lyrics(
                prompt, self.config.max_length, self.config.temperature
            )
        except Exception as e:
            log.error("lyrics generation failed", extra={"topic": request.topic, "error": str(e)})
            raise LyricsGenerationError(f"lyrics generation failed: {e}", cause=e) from e

        lyrics = format_lyrics(raw or "")
        if not lyrics:
            log.error("lyrics generation returned no text", extra={"topic": request.topic})
            raise LyricsGenerationError("lyrics generation returned no text")
        log.info("lyrics generated", extra={"lines": lyrics.count("\n") + 1})
        return lyrics

    def _optional_stage(self, stage: str, fn: Callable[..., bytes], *args) -> Optional[bytes]:
        try:
            data = fn(*args)
        except EncodingError:
            # a malformed AudioBuffer is a bug, not a provider failure
            raise
        except Exception as e:
            log.warning(f"{stage} stage failed; continuing without it", extra={"stage": stage, "error": str(e)})
            return None
        log.info(f"{stage} generated", extra={"stage": stage, "bytes": len(data)})
        return data

    def run(self, request: SongRequest) -> SongArtifacts:
        artifacts = SongArtifacts(lyrics=self.generate_lyrics(request))

        music_prompt = build_music_prompt(artifacts.lyrics, request.style, request.mood)
        with concurrent.futures.ThreadPoolExecutor(max_workers=2, thread_name_prefix="bard-stage") as executor:
            vocals = executor.submit(
                self._optional_stage, "vocals", self.joiner.join, split_lyric_lines(artifacts.lyrics)
            )
            music = executor.submit(
                self._optional_stage, "music", self.music_provider.generate_music, music_prompt
            )
            artifacts.vocals = vocals.result()
            artifacts.music = music.result()

        if artifacts.vocals is not None and artifacts.music is not None:
            artifacts.mix = self._optional_stage("mix", self.mixer.mix, artifacts.vocals, artifacts.music)
        else:
            log.info("skipping mix; a layer is missing", extra={
                "vocals": artifacts.vocals is not None, "music": artifacts.music is not None
            })
        return artifacts

    def generate(self, request: SongRequest) -> SongResult:
        artifacts = self.run(request)
        return SongResult(artifacts=artifacts, summary=summarize_artifacts(artifacts))
