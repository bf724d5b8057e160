"""
CLI Commands.

Organized by domain/feature area.
"""

from voicenotes.cli.commands.auth import app as auth_app
from voicenotes.cli.commands.folders import app as folders_app
from voicenotes.cli.commands.notes import app as notes_app
from voicenotes.cli.commands.voice import app as voice_app

__all__ = [
    "auth_app",
    "folders_app",
    "notes_app",
    "voice_app",
]
