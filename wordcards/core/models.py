"""Data models for the flashcard viewer."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


AUDIO_EXTENSION = ".mp3"


class ViewMode(Enum):
    """Which view is active."""
    RANDOM = "random"
    LIST = "list"


@dataclass(frozen=True)
class WordEntry:
    """A word from the word list with its translation."""
    source: str
    translation: str

    @property
    def audio_key(self) -> str:
        """File name of the pronunciation recording for this word."""
        return self.source[:1].upper() + self.source[1:] + AUDIO_EXTENSION


@dataclass(frozen=True)
class ViewState:
    """Everything a view needs to draw one frame."""
    mode: ViewMode
    word: Optional[str] = None
    translation: str = ""
    revealed: bool = False
    entries: tuple[WordEntry, ...] = field(default_factory=tuple)
    search_term: str = ""
    audio_enabled: bool = False
    total: int = 0
    error: Optional[str] = None
