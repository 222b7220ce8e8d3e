"""Custom urwid widgets for the flashcard viewer."""

import urwid

from wordcards.core.models import WordEntry
from wordcards.ui.theme import get_button_attrs, get_tab_attr


class WordItem(urwid.WidgetWrap):
    """A selectable word in the word list."""

    def __init__(self, entry: WordEntry, on_select=None):
        self.entry = entry
        self.on_select = on_select

        text = urwid.Text([
            ("list_item", entry.source),
            ("list_translation", f"  {entry.translation}"),
        ])
        widget = urwid.AttrMap(text, "list_item", focus_map="list_item_focus")
        super().__init__(widget)

    def selectable(self):
        return True

    def keypress(self, size, key):
        if key in (" ", "enter") and self.on_select:
            self.on_select(self.entry)
            return None
        return key

    def mouse_event(self, size, event, button, col, row, focus):
        if event == "mouse press" and button == 1 and self.on_select:
            self.on_select(self.entry)
            return True
        return False


class ActionButton(urwid.WidgetWrap):
    """A button that can be greyed out."""

    def __init__(self, label: str, on_press=None):
        self.label = label
        self.on_press = on_press
        self.enabled = True

        self.button = urwid.Button(label, on_press=self._pressed)
        self.attr = urwid.AttrMap(self.button, "button", focus_map="button_focus")
        super().__init__(self.attr)

    def _pressed(self, button):
        if self.enabled and self.on_press:
            self.on_press()

    def set_enabled(self, enabled: bool):
        """Enable or grey out the button."""
        self.enabled = enabled
        attr, focus = get_button_attrs(enabled)
        self.attr.set_attr_map({None: attr})
        self.attr.set_focus_map({None: focus})


class TabBar(urwid.WidgetWrap):
    """A horizontal tab bar."""

    def __init__(self, tabs: list[str], on_tab_change=None):
        self.tabs = tabs
        self.active_tab = 0
        self.on_tab_change = on_tab_change

        super().__init__(self._build())

    def _build(self) -> urwid.Widget:
        """Build the tab bar widget."""
        columns = []
        for i, tab in enumerate(self.tabs):
            btn = urwid.Text(f" {i + 1} {tab} ")
            btn = urwid.AttrMap(btn, get_tab_attr(i == self.active_tab))
            columns.append(("pack", btn))
            columns.append(("pack", urwid.Text(" ")))

        widget = urwid.Columns(columns)
        return urwid.AttrMap(widget, "header")

    def set_active(self, index: int):
        """Highlight a tab. Doesn't fire on_tab_change."""
        if 0 <= index < len(self.tabs) and index != self.active_tab:
            self.active_tab = index
            self._w = self._build()

    def mouse_event(self, size, event, button, col, row, focus):
        if event == "mouse press" and button == 1:
            # Calculate which tab was clicked
            x = 0
            for i, tab in enumerate(self.tabs):
                tab_width = len(tab) + 4 + 1  # number + text + padding + spacer
                if x <= col < x + tab_width:
                    if self.on_tab_change:
                        self.on_tab_change(i)
                    return True
                x += tab_width
        return False


class StatusBar(urwid.WidgetWrap):
    """A status bar showing hints and messages."""

    def __init__(self, text: str = ""):
        self.text_widget = urwid.Text(text)
        widget = urwid.AttrMap(self.text_widget, "footer")
        super().__init__(widget)

    def set_text(self, text: str):
        """Set the status text."""
        self.text_widget.set_text(text)

    def get_text(self) -> str:
        return self.text_widget.text
