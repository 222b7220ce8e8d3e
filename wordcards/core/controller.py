"""Session state and the transitions between the two views."""

import logging
import random
from abc import ABC, abstractmethod
from typing import Optional

from wordcards.core.audio import AudioBridge
from wordcards.core.catalog import WordCatalog
from wordcards.core.models import ViewMode, ViewState, WordEntry

logger = logging.getLogger(__name__)


DEFAULT_KEYS = {
    "reveal": " ",
    "next": "n",
    "play": "p",
    "random_mode": "1",
    "list_mode": "2",
}


def render(
    catalog: WordCatalog,
    selection: Optional[WordEntry],
    mode: ViewMode,
    revealed: bool = False,
    search_term: str = "",
    audio_enabled: bool = False,
    error: Optional[str] = None,
) -> ViewState:
    """Compute what should be on screen for the given session state."""
    return ViewState(
        mode=mode,
        word=selection.source if selection else None,
        translation=selection.translation if (selection and revealed) else "",
        revealed=revealed and selection is not None,
        entries=tuple(catalog.filter(search_term)),
        search_term=search_term,
        audio_enabled=audio_enabled and selection is not None,
        total=len(catalog),
        error=error,
    )


class View(ABC):
    """A surface the controller draws on."""

    @abstractmethod
    def show(self, state: ViewState) -> None:
        """Redraw from a state snapshot."""
        pass

    def focus_search(self) -> None:
        """Move input focus to the search field."""
        pass

    def show_message(self, message: str) -> None:
        """Show a transient, non-blocking message."""
        pass


class ViewController:
    """Owns the session and turns user actions into state changes.

    Every transition ends by pushing a fresh ViewState to the view.
    """

    def __init__(
        self,
        view: View,
        audio: Optional[AudioBridge] = None,
        keys: Optional[dict[str, str]] = None,
        rng: Optional[random.Random] = None,
    ):
        self.view = view
        self.audio = audio
        self.keys = {**DEFAULT_KEYS, **(keys or {})}
        self.rng = rng

        self.catalog = WordCatalog()
        self.selection: Optional[WordEntry] = None
        self.mode = ViewMode.RANDOM
        self.revealed = False
        self.search_term = ""
        self.error: Optional[str] = None

    @property
    def audio_enabled(self) -> bool:
        return bool(self.audio and self.audio.enabled)

    def state(self) -> ViewState:
        """Current state snapshot."""
        return render(
            self.catalog,
            self.selection,
            self.mode,
            revealed=self.revealed,
            search_term=self.search_term,
            audio_enabled=self.audio_enabled,
            error=self.error,
        )

    def _refresh(self):
        self.view.show(self.state())

    def _select(self, entry: Optional[WordEntry]):
        """Make an entry current with its translation hidden."""
        self.selection = entry
        self.revealed = False
        if self.audio:
            self.audio.prepare(entry)

    # Loading

    def load_complete(self, catalog: WordCatalog) -> None:
        """Start the session with a freshly loaded catalog."""
        self.catalog = catalog
        self.error = None
        self.search_term = ""
        self._select(catalog.random_entry(self.rng))
        self._refresh()

    def load_failed(self, error: Exception) -> None:
        """Show that the word list could not be loaded."""
        logger.error("Error loading words: %s", error)
        self.catalog = WordCatalog()
        self._select(None)
        self.error = f"Error loading words: {error}"
        self._refresh()

    # Random word view

    def next_word(self) -> None:
        """Show another random word."""
        self._select(self.catalog.random_entry(self.rng))
        self._refresh()

    def reveal(self) -> None:
        """Show the translation of the current word."""
        if self.revealed or self.selection is None:
            return
        self.revealed = True
        self._refresh()

    def toggle_reveal(self) -> None:
        """Reveal the translation, or move on if it's already shown."""
        if self.revealed:
            self.next_word()
        else:
            self.reveal()

    def play_audio(self) -> bool:
        """Play the current word's recording. Returns whether playback started."""
        if self.selection is None or self.audio is None:
            return False

        played = self.audio.play()
        if not played:
            self._refresh()
            self.view.show_message(f"No audio for '{self.selection.source}'")
        return played

    # Mode switching

    def switch_to_random_mode(self) -> None:
        self.mode = ViewMode.RANDOM
        self._refresh()

    def switch_to_list_mode(self) -> None:
        self.mode = ViewMode.LIST
        self._refresh()
        self.view.focus_search()

    def toggle_mode(self) -> None:
        """Switch to whichever mode isn't active."""
        if self.mode == ViewMode.RANDOM:
            self.switch_to_list_mode()
        else:
            self.switch_to_random_mode()

    # List view

    def select_from_list(self, entry: WordEntry) -> None:
        """Show a word picked from the list in the random word view."""
        self._select(entry)
        self.mode = ViewMode.RANDOM
        self._refresh()

    def search(self, term: str) -> None:
        """Filter the list by a search term."""
        self.search_term = term
        self._refresh()

    # Keyboard

    def handle_key(self, key: str) -> bool:
        """Run the shortcut bound to a key. Returns True if the key was used."""
        if key == self.keys["random_mode"]:
            self.switch_to_random_mode()
            return True
        if key == self.keys["list_mode"]:
            self.switch_to_list_mode()
            return True

        # Word navigation only applies to the random word view
        if self.mode != ViewMode.RANDOM:
            return False

        if key == self.keys["reveal"]:
            self.toggle_reveal()
            return True
        if key == self.keys["next"]:
            self.next_word()
            return True
        if key == self.keys["play"]:
            self.play_audio()
            return True
        return False
