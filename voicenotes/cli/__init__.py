"""
CLI Client Module.

Typer command groups for the user-facing CLI (cli.py).

Architecture:
- CLI is a thin presentation layer over voicenotes.client
- Commands work through a NoteStore (remote API or in-memory)
- Remote calls send X-Frontend-ID: cli for log routing
"""
