"""Tests for the view state machine."""

import random
import shutil
import tempfile
from pathlib import Path

from wordcards.core.audio import AudioBridge, AudioPlayer, PlaybackError
from wordcards.core.catalog import WordCatalog
from wordcards.core.controller import View, ViewController, render
from wordcards.core.models import ViewMode, WordEntry
from wordcards.storage.loader import LoadError


WORDS = "id,da,en\n1,Hund,Dog\n2,Kat,Cat\n3,Hest,Horse\n"


class SequenceRandom(random.Random):
    """Random source that returns preset indices."""

    def __init__(self, indices):
        super().__init__(0)
        self.indices = list(indices)

    def randrange(self, *args, **kwargs):
        return self.indices.pop(0)


class RecordingView(View):
    """View that keeps every state it was shown."""

    def __init__(self):
        self.states = []
        self.messages = []
        self.search_focused = 0

    def show(self, state):
        self.states.append(state)

    def focus_search(self):
        self.search_focused += 1

    def show_message(self, message):
        self.messages.append(message)

    @property
    def last(self):
        return self.states[-1]


class SilentPlayer(AudioPlayer):

    def __init__(self):
        self.played = []

    def play(self, audio_file):
        self.played.append(audio_file)


class RejectingPlayer(AudioPlayer):

    def play(self, audio_file):
        raise PlaybackError("device busy")


class TestRender:
    """Test the pure render function."""

    def setup_method(self):
        self.catalog = WordCatalog.parse(WORDS)
        self.hund = self.catalog.entries[0]

    def test_hidden_translation(self):
        state = render(self.catalog, self.hund, ViewMode.RANDOM)
        assert state.word == "Hund"
        assert state.translation == ""
        assert not state.revealed
        assert state.total == 3

    def test_revealed_translation(self):
        state = render(self.catalog, self.hund, ViewMode.RANDOM, revealed=True)
        assert state.translation == "Dog"
        assert state.revealed

    def test_no_selection(self):
        state = render(WordCatalog(), None, ViewMode.RANDOM, revealed=True, audio_enabled=True)
        assert state.word is None
        assert not state.revealed
        assert not state.audio_enabled
        assert state.entries == ()

    def test_filtered_entries(self):
        state = render(self.catalog, self.hund, ViewMode.LIST, search_term="ca")
        assert [e.source for e in state.entries] == ["Kat"]

    def test_same_input_same_output(self):
        a = render(self.catalog, self.hund, ViewMode.LIST, search_term="h")
        b = render(self.catalog, self.hund, ViewMode.LIST, search_term="h")
        assert a == b


class TestTransitions:
    """Test controller transitions."""

    def setup_method(self):
        self.catalog = WordCatalog.parse(WORDS)
        self.hund, self.kat, self.hest = self.catalog.entries
        self.view = RecordingView()
        self.rng = SequenceRandom([0, 1, 2, 0, 1, 2])
        self.controller = ViewController(self.view, rng=self.rng)

    def test_initial_state(self):
        assert self.controller.mode == ViewMode.RANDOM
        assert self.controller.selection is None
        assert self.view.states == []

    def test_load_complete(self):
        self.controller.load_complete(self.catalog)
        assert self.controller.selection == self.hund
        assert not self.controller.revealed
        assert self.view.last.word == "Hund"
        assert len(self.view.last.entries) == 3

    def test_load_complete_empty_catalog(self):
        self.controller.load_complete(WordCatalog())
        assert self.controller.selection is None
        assert self.view.last.word is None

    def test_load_failed(self):
        self.controller.load_failed(LoadError("connection refused"))
        assert self.controller.selection is None
        assert "connection refused" in self.view.last.error
        assert self.view.last.total == 0

    def test_next_word(self):
        self.controller.load_complete(self.catalog)
        self.controller.reveal()
        self.controller.next_word()
        assert self.controller.selection == self.kat
        assert not self.controller.revealed

    def test_reveal(self):
        self.controller.load_complete(self.catalog)
        self.controller.reveal()
        assert self.controller.revealed
        assert self.view.last.translation == "Dog"

    def test_reveal_twice_is_noop(self):
        self.controller.load_complete(self.catalog)
        self.controller.reveal()
        shown = len(self.view.states)
        self.controller.reveal()
        assert len(self.view.states) == shown
        assert self.controller.selection == self.hund

    def test_reveal_without_selection(self):
        self.controller.reveal()
        assert not self.controller.revealed
        assert self.view.states == []

    def test_toggle_reveal_twice(self):
        self.controller.load_complete(self.catalog)
        start = self.controller.selection

        self.controller.toggle_reveal()
        assert self.controller.revealed
        assert self.controller.selection == start

        self.controller.toggle_reveal()
        assert not self.controller.revealed
        assert self.controller.selection != start

    def test_switch_to_random_mode_keeps_selection(self):
        self.controller.load_complete(self.catalog)
        self.controller.switch_to_list_mode()
        self.controller.switch_to_random_mode()
        assert self.controller.mode == ViewMode.RANDOM
        assert self.controller.selection == self.hund

    def test_switch_to_list_mode_focuses_search(self):
        self.controller.load_complete(self.catalog)
        self.controller.switch_to_list_mode()
        assert self.controller.mode == ViewMode.LIST
        assert self.view.last.mode == ViewMode.LIST
        assert self.view.search_focused == 1

    def test_toggle_mode(self):
        self.controller.toggle_mode()
        assert self.controller.mode == ViewMode.LIST
        self.controller.toggle_mode()
        assert self.controller.mode == ViewMode.RANDOM

    def test_select_from_list(self):
        self.controller.load_complete(self.catalog)
        self.controller.reveal()
        self.controller.switch_to_list_mode()

        self.controller.select_from_list(self.hest)
        assert self.controller.mode == ViewMode.RANDOM
        assert self.controller.selection == self.hest
        assert not self.controller.revealed
        assert self.view.last.word == "Hest"

    def test_search(self):
        self.controller.load_complete(self.catalog)
        self.controller.switch_to_list_mode()
        self.controller.search("HOR")

        assert [e.source for e in self.view.last.entries] == ["Hest"]
        assert self.view.last.search_term == "HOR"
        assert self.controller.mode == ViewMode.LIST
        assert self.controller.selection == self.hund

    def test_search_cleared(self):
        self.controller.load_complete(self.catalog)
        self.controller.search("kat")
        self.controller.search("")
        assert len(self.view.last.entries) == 3

    def test_catalog_unchanged(self):
        self.controller.load_complete(self.catalog)
        before = self.catalog.entries
        self.controller.search("h")
        self.controller.next_word()
        self.controller.select_from_list(self.kat)
        assert self.catalog.entries == before


class TestKeys:
    """Test keyboard shortcut dispatch."""

    def setup_method(self):
        self.catalog = WordCatalog.parse(WORDS)
        self.view = RecordingView()
        self.controller = ViewController(self.view, rng=SequenceRandom([0, 1, 2]))
        self.controller.load_complete(self.catalog)

    def test_space_toggles(self):
        assert self.controller.handle_key(" ")
        assert self.controller.revealed

    def test_n_next(self):
        assert self.controller.handle_key("n")
        assert self.controller.selection.source == "Kat"

    def test_mode_keys(self):
        assert self.controller.handle_key("2")
        assert self.controller.mode == ViewMode.LIST
        assert self.controller.handle_key("1")
        assert self.controller.mode == ViewMode.RANDOM

    def test_mode_keys_from_same_mode(self):
        assert self.controller.handle_key("1")
        assert self.controller.mode == ViewMode.RANDOM

    def test_word_keys_ignored_in_list_mode(self):
        self.controller.switch_to_list_mode()
        assert not self.controller.handle_key(" ")
        assert not self.controller.handle_key("n")
        assert not self.controller.handle_key("p")
        assert not self.controller.revealed
        assert self.controller.selection.source == "Hund"

    def test_unbound_key(self):
        assert not self.controller.handle_key("x")

    def test_custom_keys(self):
        controller = ViewController(RecordingView(), keys={"next": "j"})
        controller.load_complete(self.catalog)
        assert controller.handle_key("j")
        assert not controller.handle_key("n")


class TestAudio:
    """Test playback requests through the controller."""

    def setup_method(self):
        self.temp_dir = tempfile.mkdtemp()
        self.audio_dir = Path(self.temp_dir)
        (self.audio_dir / "hund.mp3").write_bytes(b"ID3")

        self.player = SilentPlayer()
        self.view = RecordingView()
        self.controller = ViewController(
            self.view,
            audio=AudioBridge(self.audio_dir, player=self.player),
            rng=SequenceRandom([0, 1, 0]),
        )
        self.catalog = WordCatalog.parse(WORDS)

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_play_available(self):
        self.controller.load_complete(self.catalog)
        assert self.view.last.audio_enabled
        assert self.controller.handle_key("p")
        assert self.player.played == [self.audio_dir / "hund.mp3"]

    def test_missing_audio_disables_then_reenables(self):
        self.controller.load_complete(self.catalog)
        self.controller.next_word()
        assert not self.view.last.audio_enabled

        assert self.controller.play_audio() is False
        assert self.view.messages == ["No audio for 'Kat'"]

        self.controller.next_word()
        assert self.view.last.audio_enabled

    def test_play_without_selection(self):
        assert self.controller.play_audio() is False
        assert self.player.played == []

    def test_select_from_list_prepares_audio(self):
        self.controller.load_complete(self.catalog)
        self.controller.select_from_list(self.catalog.entries[2])
        assert not self.view.last.audio_enabled

    def test_rejected_playback_disables_control(self):
        controller = ViewController(
            self.view,
            audio=AudioBridge(self.audio_dir, player=RejectingPlayer()),
            rng=SequenceRandom([0, 0]),
        )
        controller.load_complete(self.catalog)
        assert self.view.last.audio_enabled

        assert controller.play_audio() is False
        assert not controller.state().audio_enabled
        assert not self.view.last.audio_enabled
        assert self.view.messages == ["No audio for 'Hund'"]

        # Selecting a word with a file tries the player again
        controller.next_word()
        assert self.view.last.audio_enabled
