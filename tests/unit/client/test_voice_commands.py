"""
Unit Tests for voice command matching.

Pure functions plus CommandGate driven by a fake clock.
"""

import pytest

from voicenotes.client.voice_commands import (
    DEFAULT_COMMANDS,
    CommandGate,
    VoiceCommand,
    match_command,
    phrase_matches,
    text_after_phrase,
)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


# =============================================================================
# Phrase matching
# =============================================================================


class TestPhraseMatches:
    """Tests for phrase_matches."""

    @pytest.mark.parametrize(
        ("transcript", "phrase"),
        [
            ("bold", "bold"),
            ("  BOLD ", "bold"),
            ("please make bold now", "make bold"),
            ("Зроби жирним", "зроби жирним"),
            ("будь ласка жирний текст", "жирний текст"),
        ],
    )
    def test_matches(self, transcript, phrase):
        assert phrase_matches(transcript, phrase) is True

    @pytest.mark.parametrize(
        ("transcript", "phrase"),
        [
            ("boldly go", "bold"),
            ("saved already", "save"),
            ("жирнийтекст", "жирний"),
            ("anything", ""),
        ],
    )
    def test_requires_whole_words(self, transcript, phrase):
        assert phrase_matches(transcript, phrase) is False


class TestMatchCommand:
    """Tests for match_command with the default command set."""

    @pytest.mark.parametrize(
        ("transcript", "expected"),
        [
            ("make italic", "italic"),
            ("underline this", "underline"),
            ("switch to times new roman", "font_times"),
            ("почати запис", "start_recording"),
            ("зупини запис", "stop_recording"),
            ("save note", "save"),
            ("dark mode", "dark_background"),
            ("світла тема", "light_background"),
            ("змінити фон на білий", "light_background"),
            ("використати аріал", "font_arial"),
            ("change font to georgia", "font_georgia"),
            ("червоний текст", "text_red"),
            ("make it blue text", "text_blue"),
            ("зеленим", "text_green"),
        ],
    )
    def test_default_commands(self, transcript, expected):
        matched = match_command(transcript, DEFAULT_COMMANDS)

        assert matched is not None
        assert matched.command.name == expected

    @pytest.mark.parametrize("transcript", ["", "   ", "the weather is nice"])
    def test_no_match(self, transcript):
        assert match_command(transcript, DEFAULT_COMMANDS) is None

    def test_first_command_wins(self):
        first = VoiceCommand("first", ("go",))
        second = VoiceCommand("second", ("go now",))

        matched = match_command("go now", [first, second])

        assert matched.command.name == "first"
        assert matched.phrase == "go"

    def test_add_tag_extracts_following_words(self):
        matched = match_command("add tag shopping list", DEFAULT_COMMANDS)

        assert matched.command.name == "add_tag"
        assert matched.args == "shopping list"

    @pytest.mark.parametrize(
        ("transcript", "tag"),
        [
            ("add tag bold", "bold"),
            ("add tag save", "save"),
            ("додати тег жирний", "жирний"),
        ],
    )
    def test_add_tag_wins_over_command_words_in_the_tag(self, transcript, tag):
        matched = match_command(transcript, DEFAULT_COMMANDS)

        assert matched.command.name == "add_tag"
        assert matched.args == tag

    def test_add_tag_in_ukrainian(self):
        matched = match_command("додай тег робота.", DEFAULT_COMMANDS)

        assert matched.command.name == "add_tag"
        assert matched.args == "робота"

    def test_commands_without_extractor_have_no_args(self):
        assert match_command("bold", DEFAULT_COMMANDS).args is None


class TestTextAfterPhrase:
    """Tests for the argument extractor."""

    def test_returns_none_when_nothing_follows(self):
        extract = text_after_phrase(["add tag"])

        assert extract("add tag") is None

    def test_is_case_insensitive(self):
        extract = text_after_phrase(["add tag"])

        assert extract("ADD TAG Urgent") == "Urgent"


# =============================================================================
# Rate limiting
# =============================================================================


class TestCommandGate:
    """Tests for CommandGate."""

    def test_first_command_is_accepted(self):
        assert CommandGate(min_interval=1.5, clock=FakeClock()).accept() is True

    def test_rejects_within_interval(self):
        clock = FakeClock()
        gate = CommandGate(min_interval=1.5, clock=clock)
        gate.accept()

        clock.advance(1.0)

        assert gate.accept() is False

    def test_rejects_at_exactly_the_interval(self):
        clock = FakeClock()
        gate = CommandGate(min_interval=1.5, clock=clock)
        gate.accept()

        clock.advance(1.5)

        assert gate.accept() is False

    def test_accepts_after_interval(self):
        clock = FakeClock()
        gate = CommandGate(min_interval=1.5, clock=clock)
        gate.accept()

        clock.advance(1.6)

        assert gate.accept() is True

    def test_rejected_attempts_do_not_extend_the_wait(self):
        clock = FakeClock()
        gate = CommandGate(min_interval=1.5, clock=clock)
        gate.accept()

        clock.advance(1.0)
        assert gate.accept() is False
        clock.advance(0.6)

        assert gate.accept() is True

    def test_reset_allows_immediate_command(self):
        gate = CommandGate(min_interval=1.5, clock=FakeClock())
        gate.accept()

        gate.reset()

        assert gate.accept() is True

    def test_interval_defaults_to_configuration(self):
        assert CommandGate().min_interval == 1.5
