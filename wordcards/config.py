"""Configuration loading and logging setup."""

import copy
import logging
import os
from pathlib import Path
from typing import Optional

import yaml
from dotenv import load_dotenv


DEFAULTS = {
    "data": {
        "words": "words.csv",
        "delimiter": ",",
        "timeout": 10,
    },
    "audio": {
        "dir": "output_words",
        "player": None,
    },
    "keys": {
        "reveal": " ",
        "next": "n",
        "play": "p",
        "random_mode": "1",
        "list_mode": "2",
    },
    "logging": {
        "level": "WARNING",
        "file": "wordcards.log",
    },
}

ENV_OVERRIDES = {
    "WORDCARDS_WORDS": ("data", "words"),
    "WORDCARDS_AUDIO_DIR": ("audio", "dir"),
    "WORDCARDS_LOG_LEVEL": ("logging", "level"),
}

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class ConfigError(Exception):
    """The config file exists but can't be used."""
    pass


def _merge(base: dict, override: dict) -> dict:
    """Recursively merge override into a copy of base."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(result.get(key), dict):
            result[key] = _merge(result[key], value)
        else:
            result[key] = value
    return result


def find_config(config_path: Optional[str] = None) -> Optional[Path]:
    """Find the first config file that exists."""
    paths_to_try = [
        config_path,
        "config.yaml",
        os.path.expanduser("~/.config/wordcards/config.yaml"),
    ]
    for path in paths_to_try:
        if path and os.path.exists(path):
            return Path(path)
    return None


def load_config(config_path: Optional[str] = None) -> dict:
    """Load configuration from file and environment over the defaults.

    Raises:
        ConfigError: If the config file can't be read, isn't a mapping,
            or holds a value the app can't use
    """
    load_dotenv()

    config = copy.deepcopy(DEFAULTS)

    path = find_config(config_path)
    if path:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Could not load {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"{path} must contain a mapping")
        _check_sections(data, path)
        config = _merge(config, data)

    for env_var, (section, key) in ENV_OVERRIDES.items():
        value = os.environ.get(env_var)
        if value:
            config[section][key] = value

    validate(config)
    return config


def _check_sections(data: dict, path: Path) -> None:
    """Top-level sections must be mappings so they merge over the defaults."""
    for section in DEFAULTS:
        if section in data and not isinstance(data[section], dict):
            raise ConfigError(f"{path}: '{section}' must be a mapping")


def validate(config: dict) -> None:
    """Check values that would otherwise fail later at runtime.

    Raises:
        ConfigError: If a value is unusable
    """
    data = config["data"]
    if not data.get("words"):
        raise ConfigError("data.words must name a word file")
    delimiter = data.get("delimiter")
    if not isinstance(delimiter, str) or not delimiter:
        raise ConfigError("data.delimiter must be a non-empty string")
    try:
        timeout = float(data.get("timeout"))
    except (TypeError, ValueError) as e:
        raise ConfigError(f"data.timeout must be a number, got {data.get('timeout')!r}") from e
    if timeout <= 0:
        raise ConfigError("data.timeout must be positive")

    player = config["audio"].get("player")
    if player is not None and not isinstance(player, str):
        raise ConfigError("audio.player must be a command string")

    for name, key in config["keys"].items():
        if not isinstance(key, str) or not key:
            raise ConfigError(f"keys.{name} must be a non-empty string")

    level = str(config["logging"].get("level", "")).upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"Unknown logging.level {config['logging'].get('level')!r}")


def configure_logging(config: dict, verbose: bool = False) -> None:
    """Send log records to the configured file.

    The terminal belongs to the UI, so nothing is logged to stderr.
    """
    log_config = config.get("logging", {})
    level = logging.DEBUG if verbose else str(log_config.get("level", "WARNING")).upper()

    root = logging.getLogger()
    root.setLevel(level)

    log_file = log_config.get("file")
    if log_file:
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
    else:
        handler = logging.NullHandler()
    root.addHandler(handler)
