"""Word list parsing and lookup."""

import logging
import random
from typing import Iterator, Optional

from wordcards.core.models import WordEntry

logger = logging.getLogger(__name__)

QUOTE = '"'


class MalformedRecord(ValueError):
    """A line of the word file that cannot be turned into an entry."""
    pass


def _clean_field(value: str) -> str:
    """Strip whitespace and a pair of surrounding quotes.

    Raises:
        MalformedRecord: If a quote appears at only one end of the field
    """
    value = value.strip()
    starts = value.startswith(QUOTE)
    ends = value.endswith(QUOTE)
    if starts and ends and len(value) >= 2:
        return value[1:-1].strip()
    if starts or ends:
        raise MalformedRecord(f"unbalanced quotes in {value!r}")
    return value


def parse_line(line: str, delimiter: str = ",") -> Optional[WordEntry]:
    """Parse one data line into an entry, or None if the line is unusable."""
    line = line.strip()
    if not line:
        return None

    parts = line.split(delimiter)
    if len(parts) < 3:
        raise MalformedRecord(f"expected at least 3 fields, got {len(parts)}")

    source = _clean_field(parts[1])
    translation = _clean_field(parts[2])
    if not source or not translation:
        raise MalformedRecord("empty source or translation")

    return WordEntry(source=source, translation=translation)


class WordCatalog:
    """Read-only, ordered collection of word entries."""

    def __init__(self, entries=()):
        self._entries: tuple[WordEntry, ...] = tuple(entries)

    @classmethod
    def parse(cls, raw_text: str, delimiter: str = ",") -> "WordCatalog":
        """Build a catalog from delimited text.

        The first line is a header and is skipped. Blank lines and lines
        that don't yield a word and a translation are dropped silently.
        """
        entries = []
        lines = raw_text.splitlines()

        for line_no, line in enumerate(lines[1:], start=2):
            try:
                entry = parse_line(line, delimiter)
            except MalformedRecord as e:
                logger.debug("Skipping line %d: %s", line_no, e)
                continue
            if entry is not None:
                entries.append(entry)

        logger.info("Loaded %d words", len(entries))
        return cls(entries)

    @property
    def entries(self) -> tuple[WordEntry, ...]:
        return self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[WordEntry]:
        return iter(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def random_entry(self, rng: Optional[random.Random] = None) -> Optional[WordEntry]:
        """Pick an entry uniformly at random, or None if empty."""
        if not self._entries:
            return None
        randrange = rng.randrange if rng is not None else random.randrange
        return self._entries[randrange(len(self._entries))]

    def filter(self, search_term: str) -> list[WordEntry]:
        """Entries whose source or translation contains the term (any case)."""
        if not search_term:
            return list(self._entries)

        term = search_term.lower()
        return [
            e for e in self._entries
            if term in e.source.lower() or term in e.translation.lower()
        ]
