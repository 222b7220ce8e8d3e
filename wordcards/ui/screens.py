"""Screen compositions for the two views."""

import urwid

from wordcards.core.models import ViewState, WordEntry
from wordcards.ui.widgets import ActionButton, WordItem


class RandomWordScreen(urwid.WidgetWrap):
    """Screen showing one word at a time."""

    def __init__(self, on_reveal=None, on_next=None, on_play=None):
        # Word display
        self.word_text = urwid.Text("", align="center")
        self.word_display = urwid.AttrMap(self.word_text, "word")

        self.translation_text = urwid.Text("", align="center")
        self.translation_display = urwid.AttrMap(self.translation_text, "translation")

        self.hint_text = urwid.Text("", align="center")
        self.hint_display = urwid.AttrMap(self.hint_text, "hint")

        # Controls
        self.reveal_button = ActionButton("Show translation", on_press=on_reveal)
        self.next_button = ActionButton("Next word", on_press=on_next)
        self.play_button = ActionButton("Play audio", on_press=on_play)

        buttons = urwid.Columns([
            self.reveal_button,
            self.next_button,
            self.play_button,
        ], dividechars=2)

        pile = urwid.Pile([
            urwid.Divider(),
            urwid.Divider(),
            self.word_display,
            urwid.Divider(),
            self.translation_display,
            urwid.Divider(),
            self.hint_display,
            urwid.Divider(),
            urwid.Divider(),
            urwid.Padding(buttons, align="center", width=("relative", 80)),
        ])

        filler = urwid.Filler(pile, valign="middle")
        self.box = urwid.LineBox(filler, title="Random word")

        super().__init__(self.box)

    def update(self, state: ViewState):
        """Show the current word from a state snapshot."""
        if state.error:
            self.word_text.set_text(("error", state.error))
            self.translation_text.set_text("")
            self.hint_text.set_text("Check the word file and restart")
        elif state.word is None:
            self.word_text.set_text("No words loaded")
            self.translation_text.set_text("")
            self.hint_text.set_text("")
        else:
            self.word_text.set_text(state.word)
            self.translation_text.set_text(state.translation)
            if state.revealed:
                self.hint_text.set_text("[Space] for the next word")
            else:
                self.hint_text.set_text("[Space] to reveal")

        has_word = state.word is not None
        self.reveal_button.set_enabled(has_word and not state.revealed)
        self.next_button.set_enabled(state.total > 0)
        self.play_button.set_enabled(state.audio_enabled)


class WordListScreen(urwid.WidgetWrap):
    """Screen with the searchable list of all words."""

    def __init__(self, on_search=None, on_select=None):
        self.on_search = on_search
        self.on_select = on_select
        self.entries: tuple[WordEntry, ...] = ()
        self._updating = False

        # Search field
        self.search_edit = urwid.Edit("Search: ")
        urwid.connect_signal(self.search_edit, "postchange", self._on_search_change)
        search = urwid.AttrMap(self.search_edit, "search", focus_map="search_focus")

        # Word display
        self.word_walker = urwid.SimpleFocusListWalker([])
        self.word_listbox = urwid.ListBox(self.word_walker)
        self.content_box = urwid.LineBox(self.word_listbox, title="Words")

        self.pile = urwid.Pile([
            ("pack", search),
            ("pack", urwid.Divider()),
            ("weight", 1, self.content_box),
        ])

        super().__init__(self.pile)

    def _on_search_change(self, edit, old_text):
        # Text set from a state snapshot is already in the controller
        if self._updating:
            return
        if self.on_search:
            self.on_search(edit.edit_text)

    def update(self, state: ViewState):
        """Show the filtered list from a state snapshot."""
        if self.search_edit.edit_text != state.search_term:
            self._updating = True
            try:
                self.search_edit.set_edit_text(state.search_term)
            finally:
                self._updating = False

        if state.entries != self.entries:
            self.set_entries(state.entries)

        if state.search_term:
            self.content_box.set_title(f"Words ({len(state.entries)} of {state.total})")
        else:
            self.content_box.set_title(f"Words ({state.total})")

    def set_entries(self, entries: tuple[WordEntry, ...]):
        """Replace the displayed list."""
        self.entries = entries
        self.word_walker.clear()
        self.word_walker.extend(
            [WordItem(entry, on_select=self.on_select) for entry in entries]
        )

    def focus_search(self):
        """Move focus to the search field."""
        self.pile.focus_position = 0
