"""Pronunciation playback from pre-recorded audio files."""

import logging
import platform
import shlex
import shutil
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from wordcards.core.models import WordEntry

logger = logging.getLogger(__name__)

DEFAULT_AUDIO_DIR = "output_words"


class PlaybackError(Exception):
    """Error while playing an audio file."""
    pass


class AudioPlayer(ABC):
    """Something that can play an audio file."""

    @abstractmethod
    def play(self, audio_file: Path) -> None:
        """
        Start playing a file.

        Raises:
            PlaybackError: If playback can't be started
        """
        pass

    def stop(self) -> None:
        """Stop any playback in progress."""
        pass

    def is_available(self) -> bool:
        """Check if the player can play anything at all."""
        return True


class SystemAudioPlayer(AudioPlayer):
    """Play audio with the platform's command line player.

    Playback runs in a background process so the UI stays responsive.
    Starting a new file stops the previous one.
    """

    LINUX_PLAYERS = [
        ["mpv", "--no-video", "--really-quiet"],
        ["mpg123", "-q"],
        ["ffplay", "-nodisp", "-autoexit", "-loglevel", "quiet"],
        ["aplay", "-q"],
    ]

    def __init__(self, command: Optional[str] = None):
        """Initialize the player.

        Args:
            command: Player command line to use instead of autodetection,
                e.g. "mpv --no-video". The file path is appended.
        """
        self.command = shlex.split(command) if command else None
        self._process: Optional[subprocess.Popen] = None
        self._available: Optional[bool] = None

    def _candidates(self) -> list[list[str]]:
        """Player command lines to try, in order."""
        if self.command:
            return [self.command]

        system = platform.system()
        if system == "Darwin":  # macOS
            return [["afplay"]]
        elif system == "Linux":
            return self.LINUX_PLAYERS
        elif system == "Windows":
            return [["powershell", "-c"]]
        raise PlaybackError(f"Unsupported platform: {system}")

    def _argv(self, base: list[str], audio_file: Path) -> list[str]:
        if base[0] == "powershell":
            # Windows Media Player via PowerShell
            return base + [f"(New-Object Media.SoundPlayer '{audio_file}').PlaySync()"]
        return base + [str(audio_file)]

    def is_available(self) -> bool:
        """Check if one of the player binaries is installed."""
        if self._available is None:
            try:
                candidates = self._candidates()
            except PlaybackError:
                candidates = []
            self._available = any(shutil.which(base[0]) for base in candidates)
        return self._available

    def play(self, audio_file: Path) -> None:
        self.stop()

        for base in self._candidates():
            try:
                self._process = subprocess.Popen(
                    self._argv(base, audio_file),
                    stdin=subprocess.DEVNULL,
                    stdout=subprocess.DEVNULL,
                    stderr=subprocess.DEVNULL,
                )
                logger.debug("Playing %s with %s", audio_file, base[0])
                return
            except FileNotFoundError:
                continue
            except OSError as e:
                raise PlaybackError(f"Audio playback failed: {e}") from e

        raise PlaybackError("No audio player found. Install mpv, mpg123, or ffplay.")

    def stop(self) -> None:
        if self._process is None:
            return

        returncode = self._process.poll()
        if returncode is None:
            self._process.terminate()
            try:
                self._process.wait(timeout=1)
            except subprocess.TimeoutExpired:
                self._process.kill()
                self._process.wait()
        elif returncode != 0:
            logger.error("Audio player exited with status %d", returncode)
        self._process = None


class AudioBridge:
    """Tracks the audio file for the current word and whether it can play."""

    def __init__(self, audio_dir: str | Path = DEFAULT_AUDIO_DIR, player: Optional[AudioPlayer] = None):
        self.audio_dir = Path(audio_dir)
        self.player = player or SystemAudioPlayer()
        self.current: Optional[Path] = None
        self.enabled = False

    def resolve(self, entry: WordEntry) -> Path:
        """Get the audio file path for an entry."""
        # audio_key is capitalized, files on disk are lowercase
        return self.audio_dir / entry.audio_key.lower()

    def prepare(self, entry: Optional[WordEntry]) -> bool:
        """Point the bridge at the entry's audio file. Returns whether it's playable."""
        if entry is None:
            self.current = None
            self.enabled = False
            return False

        self.current = self.resolve(entry)
        if not self.current.is_file():
            logger.warning("Audio file not found: %s", entry.audio_key)
            self.enabled = False
        elif not self.player.is_available():
            logger.warning("No audio player available for %s", entry.audio_key)
            self.enabled = False
        else:
            self.enabled = True
        return self.enabled

    def play(self) -> bool:
        """Play the prepared file. Failures are logged, never raised."""
        if not self.enabled or self.current is None:
            logger.warning("No audio loaded for playback")
            return False

        try:
            self.player.play(self.current)
        except PlaybackError as e:
            logger.error("Error playing audio: %s", e)
            self.enabled = False
            return False
        return True
