"""Core logic - UI independent."""
from .models import WordEntry, ViewMode, ViewState
from .catalog import WordCatalog

# Note: ViewController and AudioBridge are imported directly
# from their modules where needed

__all__ = [
    "WordEntry",
    "ViewMode",
    "ViewState",
    "WordCatalog",
]
