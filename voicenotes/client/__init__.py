"""
Notes Client Module.

Python counterpart of the browser client: an HTTP client for the notes API,
an injectable note store (remote or in-memory), and the voice-command
matcher.

Architecture:
- Client code is a thin layer; ownership and lifecycle rules live in the backend
- The store implementation is chosen by client.store in application.yaml
- Requests send X-Frontend-ID so backend logs can be routed by caller
"""
