"""Color theme and styling for the TUI."""

from wordcards.core.models import ViewMode

# Urwid palette for the application
# Format: (name, foreground, background)

PALETTE = [
    # UI elements
    ("header", "white", "dark blue"),
    ("footer", "white", "dark gray"),
    ("tab_active", "white,bold", "dark blue"),
    ("tab_inactive", "light gray", "dark gray"),

    # List items
    ("list_item", "white", ""),
    ("list_item_focus", "white,bold", "dark cyan"),
    ("list_translation", "light gray", ""),

    # Search
    ("search", "white", "dark gray"),
    ("search_focus", "white,bold", "dark blue"),

    # Random word
    ("word", "white,bold", ""),
    ("translation", "light green", ""),
    ("hint", "dark gray", ""),

    # Status/info
    ("info", "light cyan", ""),
    ("warning", "yellow", ""),
    ("error", "light red", ""),

    # Buttons
    ("button", "white", "dark gray"),
    ("button_focus", "white,bold", "dark blue"),
    ("button_disabled", "dark gray", ""),
]


def get_tab_attr(active: bool) -> str:
    """Get attribute name for a mode tab."""
    return "tab_active" if active else "tab_inactive"


def get_button_attrs(enabled: bool) -> tuple[str, str]:
    """Get (normal, focus) attribute names for a button."""
    if enabled:
        return "button", "button_focus"
    return "button_disabled", "button_disabled"


def get_hint(mode: ViewMode, revealed: bool) -> str:
    """Keyboard hint for the status bar."""
    if mode == ViewMode.LIST:
        return "Type to search | Enter/click to open | [Esc]clear [1]random [?]help"
    if revealed:
        return "[Space]next [n]ext [p]lay [2]list [?]help [q]uit"
    return "[Space]reveal [n]ext [p]lay [2]list [?]help [q]uit"
