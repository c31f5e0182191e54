from __future__ import annotations

from enum import Enum
from typing import Optional


class FailureCategory(Enum):
    """User-facing category of a failed song request."""

    AUTHENTICATION = "authentication"
    MODEL_ACCESS = "model_access"
    UNSPECIFIED = "unspecified"


class PipelineError(Exception):
    """Base error for the Bard song pipeline."""


class ConfigError(PipelineError):
    """Raised when configuration is missing or out of range."""


class ValidationError(PipelineError):
    """Raised when a song request is malformed."""


class ProviderError(PipelineError):
    """Raised by a generation provider. ``kind`` tells callers what went wrong."""

    kind = FailureCategory.UNSPECIFIED

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class AuthenticationError(ProviderError):
    """Raised when the provider rejects our credentials."""

    kind = FailureCategory.AUTHENTICATION


class ModelAccessError(ProviderError):
    """Raised when the requested model is missing or not accessible."""

    kind = FailureCategory.MODEL_ACCESS


class ProviderTransportError(ProviderError):
    """Raised on network failures and unexpected provider responses."""


class LyricsGenerationError(PipelineError):
    """Raised when the mandatory lyrics stage fails."""

    def __init__(self, message: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.cause = cause

    @property
    def category(self) -> FailureCategory:
        return classify_failure(self.cause)


class VocalSynthesisError(PipelineError):
    """Raised when per-line vocal synthesis cannot produce a joined track."""


class AudioDecodeError(PipelineError):
    """Raised when encoded audio cannot be decoded."""


class AudioMixError(PipelineError):
    """Raised when two decoded tracks cannot be mixed."""


class EncodingError(PipelineError, ValueError):
    """Raised when an AudioBuffer violates its own invariants."""


class StorageError(PipelineError, OSError):
    """Raised when song files cannot be written."""


class SongGenerationError(PipelineError):
    """User-facing failure of a whole song request."""

    def __init__(self, message: str, category: FailureCategory = FailureCategory.UNSPECIFIED) -> None:
        super().__init__(message)
        self.category = category


def classify_failure(error: Optional[BaseException]) -> FailureCategory:
    """Map a failure to a category by walking the cause chain for a ProviderError."""
    seen = set()
    while error is not None and id(error) not in seen:
        if isinstance(error, ProviderError):
            return error.kind
        seen.add(id(error))
        error = error.__cause__
    return FailureCategory.UNSPECIFIED
