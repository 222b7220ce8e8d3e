"""Fetching the word file from disk or over HTTP."""

import logging
from pathlib import Path

import requests

from wordcards.core.catalog import WordCatalog

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class LoadError(Exception):
    """The word file could not be fetched."""
    pass


def is_url(source: str) -> bool:
    """Check whether a source should be fetched over HTTP."""
    return source.lower().startswith(("http://", "https://"))


def load_text(source: str | Path, timeout: float = DEFAULT_TIMEOUT) -> str:
    """Fetch the raw text of a word file.

    Args:
        source: Local path or http(s) URL
        timeout: Seconds to wait for an HTTP response

    Raises:
        LoadError: If the file can't be read or the request fails
    """
    source = str(source)

    if is_url(source):
        logger.info("Fetching word list from %s", source)
        try:
            response = requests.get(source, timeout=timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise LoadError(f"Could not fetch {source}: {e}") from e
        # Word files are UTF-8 whatever charset the server claims
        try:
            return response.content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise LoadError(f"Could not decode {source}: {e}") from e

    path = Path(source).expanduser()
    logger.info("Reading word list from %s", path)
    try:
        with open(path, "r", encoding="utf-8-sig") as f:
            return f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise LoadError(f"Could not read {path}: {e}") from e


def load_catalog(
    source: str | Path,
    delimiter: str = ",",
    timeout: float = DEFAULT_TIMEOUT,
) -> WordCatalog:
    """Fetch and parse a word file. No partial catalog on failure."""
    raw_text = load_text(source, timeout=timeout)
    return WordCatalog.parse(raw_text, delimiter=delimiter)
