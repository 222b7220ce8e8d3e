"""Main application entry point."""

import argparse
import logging
from typing import Optional

import urwid

from wordcards.config import ConfigError, configure_logging, load_config
from wordcards.core.audio import AudioBridge, SystemAudioPlayer
from wordcards.core.controller import View, ViewController
from wordcards.core.models import ViewMode, ViewState
from wordcards.storage.loader import LoadError, load_catalog
from wordcards.ui.screens import RandomWordScreen, WordListScreen
from wordcards.ui.theme import PALETTE, get_hint
from wordcards.ui.widgets import StatusBar, TabBar

logger = logging.getLogger(__name__)


HELP_TEXT = """
Vocabulary Flashcards

Random word:
  Space       Show translation / next word
  n           Next word
  p           Play pronunciation
  q           Quit

Word list:
  (type)      Search words and translations
  ↑/↓         Navigate
  Enter       Open word
  Esc         Clear search

Anywhere:
  1           Random word
  2           Word list
  Tab         Switch view
  ?           This help

Press any key to close...
"""


class App(View):
    """Main application class."""

    TAB_NAMES = ["Random", "List"]
    MODES = [ViewMode.RANDOM, ViewMode.LIST]

    def __init__(self, config: dict):
        self.config = config
        self.loop: Optional[urwid.MainLoop] = None
        self._overlay_open = False

        audio_config = config.get("audio", {})
        self.audio = AudioBridge(
            audio_dir=audio_config.get("dir", "output_words"),
            player=SystemAudioPlayer(audio_config.get("player")),
        )
        self.controller = ViewController(self, audio=self.audio, keys=config.get("keys"))

        self._init_ui()

    def _init_ui(self):
        """Initialize the UI components."""
        self.tab_bar = TabBar(self.TAB_NAMES, on_tab_change=self._on_tab_change)

        self.random_screen = RandomWordScreen(
            on_reveal=self.controller.reveal,
            on_next=self.controller.next_word,
            on_play=self.controller.play_audio,
        )
        self.list_screen = WordListScreen(
            on_search=self.controller.search,
            on_select=self.controller.select_from_list,
        )

        self.status_bar = StatusBar("Loading words...")

        self.body = urwid.WidgetPlaceholder(self.random_screen)
        self.frame = urwid.Frame(
            header=self.tab_bar,
            body=self.body,
            footer=self.status_bar,
        )

    def _on_tab_change(self, index: int):
        """Handle a click on a mode tab."""
        if self.MODES[index] == ViewMode.RANDOM:
            self.controller.switch_to_random_mode()
        else:
            self.controller.switch_to_list_mode()

    # View interface

    def show(self, state: ViewState) -> None:
        self.tab_bar.set_active(self.MODES.index(state.mode))
        self.random_screen.update(state)
        self.list_screen.update(state)

        if state.mode == ViewMode.RANDOM:
            self.body.original_widget = self.random_screen
        else:
            self.body.original_widget = self.list_screen

        self.update_status(state)

    def focus_search(self) -> None:
        self.list_screen.focus_search()

    def show_message(self, message: str) -> None:
        self.status_bar.set_text(message)

    def update_status(self, state: ViewState):
        """Update the status bar based on current state."""
        if state.error:
            self.status_bar.set_text("Word list unavailable | [q]uit")
            return
        base_status = f"Words: {state.total}"
        self.status_bar.set_text(f"{base_status} | {get_hint(state.mode, state.revealed)}")

    # Input

    def _input_filter(self, keys, raw):
        """Route shortcut keys to the controller before widgets see them."""
        if self._overlay_open:
            return keys

        remaining = []
        for key in keys:
            if isinstance(key, str) and self.controller.handle_key(key):
                continue
            remaining.append(key)
        return remaining

    def handle_input(self, key):
        """Handle keys no widget used."""

        # Handle tuple keys (mouse events) - ignore them
        if not isinstance(key, str):
            return

        if key in ("q", "Q") and self.controller.mode == ViewMode.RANDOM:
            raise urwid.ExitMainLoop()

        if key == "tab":
            self.controller.toggle_mode()
            return

        if key == "esc" and self.controller.mode == ViewMode.LIST:
            self.controller.search("")
            return

        if key == "?":
            self._show_help()
            return

    def _show_help(self):
        """Show help overlay."""
        if self.loop is None:
            return

        text = urwid.Text(HELP_TEXT)
        filler = urwid.Filler(text, valign="top")
        box = urwid.LineBox(filler, title="Help")
        overlay = urwid.Overlay(
            box,
            self.frame,
            align="center",
            width=50,
            valign="middle",
            height=26,
        )

        def close_help(key):
            self.loop.widget = self.frame
            self.loop.unhandled_input = self.handle_input
            self._overlay_open = False
            return True

        self._overlay_open = True
        self.loop.widget = overlay
        self.loop.unhandled_input = close_help

    # Loading

    def load_words(self, loop=None, user_data=None):
        """Fetch the word list and start the session."""
        data_config = self.config.get("data", {})
        source = data_config.get("words", "words.csv")
        try:
            catalog = load_catalog(
                source,
                delimiter=data_config.get("delimiter", ","),
                timeout=float(data_config.get("timeout", 10)),
            )
        except LoadError as e:
            self.controller.load_failed(e)
            return
        self.controller.load_complete(catalog)

    def run(self):
        """Run the application."""
        self.loop = urwid.MainLoop(
            self.frame,
            palette=PALETTE,
            unhandled_input=self.handle_input,
            input_filter=self._input_filter,
            handle_mouse=True,
        )
        # Load after the first frame is drawn
        self.loop.set_alarm_in(0, self.load_words)

        try:
            self.loop.run()
        except KeyboardInterrupt:
            pass
        finally:
            self.audio.player.stop()


def main(argv=None):
    """Entry point."""
    parser = argparse.ArgumentParser(description="Vocabulary flashcards")
    parser.add_argument(
        "-c", "--config",
        help="Path to config file",
        default=None,
    )
    parser.add_argument(
        "-w", "--words",
        help="Word file path or URL",
        default=None,
    )
    parser.add_argument(
        "-a", "--audio-dir",
        help="Directory with pronunciation recordings",
        default=None,
    )
    parser.add_argument(
        "-v", "--verbose",
        help="Log debug messages",
        action="store_true",
    )
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigError as e:
        parser.error(str(e))

    if args.words:
        config["data"]["words"] = args.words
    if args.audio_dir:
        config["audio"]["dir"] = args.audio_dir

    configure_logging(config, verbose=args.verbose)
    logger.info("Starting with word list %s", config["data"]["words"])

    app = App(config)
    app.run()


if __name__ == "__main__":
    main()
