from __future__ import annotations

import os
from typing import Optional

from bard.errors import StorageError
from bard.logging_utils import get_logger
from bard.types import SavedSongFiles, SongArtifacts

log = get_logger(__name__)

LYRICS_FILENAME = "lyrics.txt"
VOCALS_FILENAME = "vocals.wav"
MUSIC_FILENAME = "music.wav"
MIX_FILENAME = "final-mix.wav"


class SongFileStore:
    """Write song artifacts under ``output_dir/<song_id>/``."""

    def __init__(self, output_dir: str = "music-examples") -> None:
        self.output_dir = output_dir

    def _write_bytes(self, song_dir: str, filename: str, data: Optional[bytes]) -> Optional[str]:
        if data is None:
            return None
        path = os.path.join(song_dir, filename)
        with open(path, 'wb') as f:
            f.write(data)
        return path

    def save_song_files(self, song_id: str, artifacts: SongArtifacts) -> SavedSongFiles:
        """Write lyrics plus whichever audio layers exist. Absent layers are skipped."""
        song_dir = os.path.join(self.output_dir, song_id)
        try:
            os.makedirs(song_dir, exist_ok=True)

            lyrics_path = os.path.join(song_dir, LYRICS_FILENAME)
            with open(lyrics_path, 'w', encoding='utf-8') as f:
                f.write(artifacts.lyrics)

            saved = SavedSongFiles(
                song_dir=song_dir,
                lyrics_path=lyrics_path,
                vocals_path=self._write_bytes(song_dir, VOCALS_FILENAME, artifacts.vocals),
                music_path=self._write_bytes(song_dir, MUSIC_FILENAME, artifacts.music),
                mix_path=self._write_bytes(song_dir, MIX_FILENAME, artifacts.mix),
            )
        except OSError as e:
            log.exception("saving song files failed")
            raise StorageError(f"failed to save song {song_id} under {song_dir}: {e}") from e
        log.info("song files saved", extra={"song_dir": song_dir, "layers": len(artifacts.layers())})
        return saved
