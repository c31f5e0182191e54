"""Capabilities the song pipeline consumes, and the prompts it sends them.

Concrete implementations live in :mod:`bard.huggingface_client`; tests use
in-memory fakes. Providers raise :class:`bard.errors.ProviderError`
subclasses so callers can tell authentication problems from model access
problems without reading error text.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class LyricsProvider(Protocol):
    def generate_lyrics(self, prompt: str, max_length: int, temperature: float) -> str:
        ...


@runtime_checkable
class VocalsProvider(Protocol):
    def synthesize(self, line: str) -> bytes:
        ...


@runtime_checkable
class MusicProvider(Protocol):
    def generate_music(self, prompt: str) -> bytes:
        ...


_LYRICS_INSTRUCTIONS = """Please follow these steps:
1. First, think about the main theme and emotions we want to convey
2. Then, create engaging lyrics with clear verses and a chorus
3. Make sure the lyrics tell a cohesive story
4. Add a bridge if it enhances the song's structure

Please write the lyrics in this format:

Verse 1:
[First verse lyrics]

Chorus:
[Chorus lyrics]

Verse 2:
[Second verse lyrics]

[Continue with Bridge and/or additional verses as needed]"""


def build_lyrics_prompt(topic: str, style: Optional[str] = None, mood: Optional[str] = None) -> str:
    qualifiers = []
    if style:
        qualifiers.append(f"in {style} style")
    if mood:
        qualifiers.append(f"with a {mood} mood")
    context = " ".join(qualifiers)
    lead = f"Let's write a song {context + ' ' if context else ''}about {topic}."
    return f"{lead}\n{_LYRICS_INSTRUCTIONS}"


def build_music_prompt(lyrics: str, style: Optional[str] = None, mood: Optional[str] = None) -> str:
    first_line = next((line.strip() for line in lyrics.split("\n") if line.strip()), "")
    return (
        f"{style or 'pop'} instrumental music with {mood or 'upbeat'} mood, "
        f"melodic and atmospheric, with a clear rhythm that matches these lyrics: {first_line}"
    )


def format_lyrics(text: str) -> str:
    """Trim every line and drop blank ones."""
    return "\n".join(line.strip() for line in text.strip().split("\n") if line.strip())
