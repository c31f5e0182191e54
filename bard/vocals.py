from __future__ import annotations

from typing import Iterable, List

from bard.errors import VocalSynthesisError
from bard.fanout import gather_indexed
from bard.logging_utils import get_logger
from bard.providers import VocalsProvider

log = get_logger(__name__)


def split_lyric_lines(lyrics: str) -> List[str]:
    return [line.strip() for line in lyrics.split("\n") if line.strip()]


class VocalSynthesisJoiner:
    """Synthesize each lyric line concurrently and join the audio in line order.

    The joined track is a plain byte concatenation of what the provider
    returned for each line. Nothing is re-encoded or resampled, so a provider
    that returns complete WAV files per line yields a stream of back-to-back
    WAV files.
    """

    def __init__(self, provider: VocalsProvider, max_workers: int = 8) -> None:
        self.provider = provider
        self.max_workers = max_workers

    def join(self, lines: Iterable[str]) -> bytes:
        cleaned = [line.strip() for line in lines if line and line.strip()]
        if not cleaned:
            raise VocalSynthesisError("no lyric lines to synthesize")

        log.info("synthesize vocals", extra={"lines": len(cleaned), "workers": self.max_workers})
        try:
            chunks = gather_indexed(self.provider.synthesize, cleaned, self.max_workers)
        except Exception as e:
            log.error("line synthesis failed", extra={"lines": len(cleaned), "error": str(e)})
            raise VocalSynthesisError(f"vocal synthesis failed: {e}") from e

        joined = b"".join(chunks)
        log.info("vocals joined", extra={"lines": len(chunks), "bytes": len(joined)})
        return joined
