"""
Voice Command Matching.

Matches a speech transcript against a fixed set of phrase-triggered
commands. A phrase matches when it equals the whole transcript or appears
in it as whole words (case-insensitive). Commands are tried in order and
the first match wins, so commands that take arguments are listed first.

Repeated recognition results arrive in bursts, so accepted commands are
rate limited by CommandGate, which takes an injectable clock.

Usage:
    gate = CommandGate()
    matched = match_command(transcript, DEFAULT_COMMANDS)
    if matched and gate.accept():
        dispatch(matched.command.name, matched.args)
"""

import re
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from voicenotes.backend.core.config import get_app_config
from voicenotes.backend.core.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class VoiceCommand:
    """A named action and the phrases that trigger it."""

    name: str
    phrases: tuple[str, ...]
    description: str = ""
    extract_args: Callable[[str], str | None] | None = field(default=None, compare=False)


@dataclass(frozen=True)
class MatchedCommand:
    """Result of a successful match."""

    command: VoiceCommand
    phrase: str
    args: str | None = None


def phrase_matches(transcript: str, phrase: str) -> bool:
    """True if phrase is the whole transcript or occurs in it on word boundaries."""
    lower_transcript = transcript.strip().lower()
    lower_phrase = phrase.strip().lower()
    if not lower_phrase:
        return False
    if lower_transcript == lower_phrase:
        return True
    return re.search(rf"\b{re.escape(lower_phrase)}\b", lower_transcript) is not None


def match_command(transcript: str, commands: Sequence[VoiceCommand]) -> MatchedCommand | None:
    """
    Find the first command with a phrase matching the transcript.

    Args:
        transcript: Recognized speech
        commands: Candidate commands, in priority order

    Returns:
        MatchedCommand with extracted arguments, or None
    """
    if not transcript or not transcript.strip():
        return None

    for command in commands:
        for phrase in command.phrases:
            if phrase_matches(transcript, phrase):
                args = command.extract_args(transcript) if command.extract_args else None
                logger.debug(
                    "Voice command matched",
                    extra={"command": command.name, "phrase": phrase},
                )
                return MatchedCommand(command=command, phrase=phrase, args=args)
    return None


class CommandGate:
    """
    Minimum-interval gate for accepted commands.

    A command is accepted only if more than min_interval seconds have passed
    since the previously accepted one. Rejected attempts do not reset the
    interval.
    """

    def __init__(
        self,
        min_interval: float | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if min_interval is None:
            min_interval = get_app_config().application.client.voice_command_interval_seconds
        self.min_interval = min_interval
        self._clock = clock
        self._last_accepted: float | None = None

    def accept(self) -> bool:
        """Record and allow a command if the interval has elapsed."""
        now = self._clock()
        if self._last_accepted is not None and now - self._last_accepted <= self.min_interval:
            return False
        self._last_accepted = now
        return True

    def reset(self) -> None:
        self._last_accepted = None


def text_after_phrase(phrases: Sequence[str]) -> Callable[[str], str | None]:
    """Build an extractor returning the words spoken after the first matching phrase."""

    def extract(transcript: str) -> str | None:
        for phrase in phrases:
            found = re.search(rf"\b{re.escape(phrase)}\b", transcript, re.IGNORECASE)
            if found:
                rest = transcript[found.end():].strip(" ,.:;")
                return rest or None
        return None

    return extract


_ADD_TAG_PHRASES = ("add tag", "додати тег", "додай тег", "створити тег", "створи тег")

DEFAULT_COMMANDS: tuple[VoiceCommand, ...] = (
    VoiceCommand(
        "add_tag",
        _ADD_TAG_PHRASES,
        "Add a tag; the words after the phrase become the tag",
        extract_args=text_after_phrase(_ADD_TAG_PHRASES),
    ),
    VoiceCommand(
        "bold",
        ("make bold", "bold", "зробити жирним", "жирний текст", "жирний", "зроби жирним"),
        "Make the text bold",
    ),
    VoiceCommand(
        "italic",
        ("make italic", "italic", "зробити курсивом", "курсив", "зроби курсивом"),
        "Make the text italic",
    ),
    VoiceCommand(
        "underline",
        ("underline", "підкреслити", "підкреслений текст", "зроби підкресленим"),
        "Underline the text",
    ),
    VoiceCommand(
        "font_arial",
        (
            "change font to arial", "use arial", "font arial", "arial",
            "змінити шрифт на аріал", "використати аріал", "поставити шрифт аріал",
            "шрифт аріал", "аріал",
        ),
        "Switch font to Arial",
    ),
    VoiceCommand(
        "font_times",
        (
            "change font to times", "use times", "times new roman", "font times", "times",
            "змінити шрифт на таймс", "використати таймс", "поставити шрифт таймс",
            "шрифт таймс", "таймс",
        ),
        "Switch font to Times New Roman",
    ),
    VoiceCommand(
        "font_courier",
        (
            "change font to courier", "use courier", "courier new", "font courier", "courier",
            "змінити шрифт на кур'єр", "використати кур'єр", "шрифт кур'єр", "кур'єр",
        ),
        "Switch font to Courier New",
    ),
    VoiceCommand(
        "font_georgia",
        (
            "change font to georgia", "use georgia", "font georgia", "georgia",
            "змінити шрифт на джорджія", "використати джорджія", "шрифт джорджія", "джорджія",
        ),
        "Switch font to Georgia",
    ),
    VoiceCommand(
        "start_recording",
        ("start recording", "record audio", "почати запис", "записати аудіо", "почни запис"),
        "Start recording audio",
    ),
    VoiceCommand(
        "stop_recording",
        ("stop recording", "зупинити запис", "стоп запис", "зупини запис"),
        "Stop recording audio",
    ),
    VoiceCommand(
        "save",
        ("save note", "save", "зберегти нотатку", "зберегти", "збережи"),
        "Save the current note",
    ),
    VoiceCommand(
        "dark_background",
        (
            "dark mode", "dark background", "змінити фон на чорний",
            "темний фон", "чорний фон", "темний режим", "темна тема",
        ),
        "Switch to a dark background",
    ),
    VoiceCommand(
        "light_background",
        (
            "light mode", "light background", "змінити фон на білий",
            "світлий фон", "білий фон", "світлий режим", "світла тема",
        ),
        "Switch to a light background",
    ),
    VoiceCommand(
        "text_white",
        ("white text", "змінити текст на білий", "білий текст", "білим кольором", "білим"),
        "Make the text white",
    ),
    VoiceCommand(
        "text_black",
        ("black text", "змінити текст на чорний", "чорний текст", "чорним кольором", "чорним"),
        "Make the text black",
    ),
    VoiceCommand(
        "text_red",
        ("red text", "змінити колір тексту на червоний", "червоний текст", "червоним кольором", "червоним"),
        "Make the text red",
    ),
    VoiceCommand(
        "text_blue",
        ("blue text", "змінити колір тексту на синій", "синій текст", "синім кольором", "синім"),
        "Make the text blue",
    ),
    VoiceCommand(
        "text_green",
        ("green text", "змінити колір тексту на зелений", "зелений текст", "зеленим кольором", "зеленим"),
        "Make the text green",
    ),
    VoiceCommand(
        "undo",
        ("undo", "відмінити", "скасувати", "відміни"),
        "Undo the last change",
    ),
    VoiceCommand(
        "redo",
        ("redo", "повторити", "повтори"),
        "Redo the last undone change",
    ),
)
