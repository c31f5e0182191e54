from __future__ import annotations

import secrets
from typing import Callable, Optional

from bard.config import BardConfig
from bard.errors import FailureCategory, LyricsGenerationError, SongGenerationError, StorageError
from bard.huggingface_client import (
    HuggingFaceLyricsProvider,
    HuggingFaceMusicProvider,
    HuggingFaceVocalsProvider,
    client_from_config,
)
from bard.logging_utils import get_logger
from bard.orchestrator import SongPipeline
from bard.storage import SongFileStore
from bard.types import SavedSongFiles, SongRequest

log = get_logger(__name__)

USER_MESSAGES = {
    FailureCategory.AUTHENTICATION:
        "Authentication failed. Please check your Hugging Face token has the necessary permissions.",
    FailureCategory.MODEL_ACCESS:
        "Model access error. Please check if you have access to the specified models.",
    FailureCategory.UNSPECIFIED:
        "Failed to generate song. Please try again later or contact support if the issue persists.",
}


def new_song_id() -> str:
    return secrets.token_hex(8)


def format_saved_files(files: SavedSongFiles) -> str:
    lines = [f"Files saved in {files.song_dir}/:", f"- Lyrics: {files.lyrics_path}"]
    if files.vocals_path:
        lines.append(f"- Vocals: {files.vocals_path}")
    if files.music_path:
        lines.append(f"- Music: {files.music_path}")
    if files.mix_path:
        lines.append(f"- Final Mix: {files.mix_path}")
    return "\n".join(lines)


class BardService:
    """Generate a song, save it, and describe the result for a person to read."""

    def __init__(self, pipeline: SongPipeline, store: SongFileStore,
                 id_factory: Callable[[], str] = new_song_id) -> None:
        self.pipeline = pipeline
        self.store = store
        self.id_factory = id_factory

    @classmethod
    def from_config(cls, config: BardConfig, store: Optional[SongFileStore] = None) -> "BardService":
        client = client_from_config(config)
        pipeline = SongPipeline(
            config,
            lyrics_provider=HuggingFaceLyricsProvider(client, config.lyric_model),
            vocals_provider=HuggingFaceVocalsProvider(client, config.vocal_model),
            music_provider=HuggingFaceMusicProvider(client, config.music_model),
        )
        return cls(pipeline, store or SongFileStore(config.output_dir))

    def generate_song(self, request: SongRequest) -> str:
        song_id = self.id_factory()
        log.info("generate song", extra={
            "song_id": song_id, "topic": request.topic, "style": request.style, "mood": request.mood
        })
        try:
            result = self.pipeline.generate(request)
            files = self.store.save_song_files(song_id, result.artifacts)
        except LyricsGenerationError as e:
            category = e.category
            log.error("song generation failed", extra={"song_id": song_id, "category": category.value})
            raise SongGenerationError(USER_MESSAGES[category], category) from e
        except StorageError as e:
            log.error("song generation failed", extra={"song_id": song_id, "error": str(e)})
            raise SongGenerationError(USER_MESSAGES[FailureCategory.UNSPECIFIED]) from e

        return f"Generated Song\n\n{result.summary}\n\n{format_saved_files(files)}\n"
