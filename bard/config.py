from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from bard.errors import ConfigError

DEFAULT_LYRIC_MODEL = "deepseek-ai/DeepSeek-R1-Distill-Qwen-32B"
DEFAULT_VOCAL_MODEL = "speechbrain/tts-tacotron2-ljspeech"
DEFAULT_MUSIC_MODEL = "facebook/musicgen-small"
DEFAULT_API_BASE_URL = "https://api-inference.huggingface.co/models"


@dataclass(frozen=True)
class BardConfig:
    """Process-wide settings, built once at startup and passed to constructors."""

    hf_token: str = ""
    lyric_model: str = DEFAULT_LYRIC_MODEL
    vocal_model: str = DEFAULT_VOCAL_MODEL
    music_model: str = DEFAULT_MUSIC_MODEL
    max_length: int = 200
    temperature: float = 0.6  # DeepSeek recommends 0.6
    output_dir: str = "music-examples"
    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout: float = 120.0
    vocal_workers: int = 8

    def __post_init__(self) -> None:
        if self.max_length <= 0:
            raise ConfigError(f"max_length must be positive, got {self.max_length}")
        if not 0.0 <= self.temperature <= 1.0:
            raise ConfigError(f"temperature must be within [0, 1], got {self.temperature}")
        if self.request_timeout <= 0:
            raise ConfigError(f"request_timeout must be positive, got {self.request_timeout}")
        if self.vocal_workers < 1:
            raise ConfigError(f"vocal_workers must be at least 1, got {self.vocal_workers}")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "BardConfig":
        """Build a config from HF_TOKEN and BARD_* variables.

        Raises ConfigError if HF_TOKEN is missing or a numeric override does
        not parse.
        """
        env = os.environ if environ is None else environ
        token = env.get("HF_TOKEN", "").strip()
        if not token:
            raise ConfigError("HF_TOKEN environment variable is not set")
        try:
            return cls(
                hf_token=token,
                lyric_model=env.get("BARD_LYRIC_MODEL", DEFAULT_LYRIC_MODEL),
                vocal_model=env.get("BARD_VOCAL_MODEL", DEFAULT_VOCAL_MODEL),
                music_model=env.get("BARD_MUSIC_MODEL", DEFAULT_MUSIC_MODEL),
                max_length=int(env.get("BARD_MAX_LENGTH", "200")),
                temperature=float(env.get("BARD_TEMPERATURE", "0.6")),
                output_dir=env.get("BARD_OUTPUT_DIR", "music-examples"),
                api_base_url=env.get("BARD_API_BASE_URL", DEFAULT_API_BASE_URL),
                request_timeout=float(env.get("BARD_REQUEST_TIMEOUT", "120")),
                vocal_workers=int(env.get("BARD_VOCAL_WORKERS", "8")),
            )
        except ValueError as e:
            raise ConfigError(f"invalid BARD_* setting: {e}") from e
