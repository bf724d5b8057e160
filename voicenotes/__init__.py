"""
Voice Notes.

- backend/: REST API, services, persistence, configuration
- client/: API client, note stores, voice command matching
- cli/: Command-line client (Typer + Rich)
"""
