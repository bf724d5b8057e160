"""
HTTP Client for the Notes API.

Async client used by the CLI and the remote note store. Every request
carries the bearer token and an X-Frontend-ID header for log routing.
Transport failures are retried (tenacity) behind a circuit breaker
(aiobreaker); error envelopes are mapped back onto the application
exception hierarchy so callers handle remote and local failures alike.
"""

from pathlib import Path
from typing import Any

import aiobreaker
import httpx
from pydantic import BaseModel

from voicenotes.backend.core.config import get_api_base_url, get_app_config, resolve_project_path
from voicenotes.backend.core.exceptions import (
    ApplicationError,
    AuthenticationError,
    ConflictError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)
from voicenotes.backend.core.logging import get_logger, log_with_source
from voicenotes.backend.core.resilience import create_circuit_breaker, create_retry
from voicenotes.backend.schemas.auth import AuthResponse, UserResponse
from voicenotes.backend.schemas.folder import FolderCreate, FolderResponse, FolderUpdate
from voicenotes.backend.schemas.note import NoteCreate, NoteResponse, NoteUpdate

logger = get_logger(__name__)

ERROR_STATUS_MAP: dict[int, type[ApplicationError]] = {
    exc_cls.status_code: exc_cls
    for exc_cls in (ValidationError, AuthenticationError, NotFoundError, ConflictError)
}


def token_path() -> Path:
    """Location of the saved bearer token, relative to the project root unless absolute."""
    return resolve_project_path(get_app_config().application.client.token_file)


def load_token(path: Path | None = None) -> str | None:
    """Read the saved bearer token, or None if the user has not logged in."""
    path = path or token_path()
    if not path.exists():
        return None
    token = path.read_text(encoding="utf-8").strip()
    return token or None


def save_token(token: str, path: Path | None = None) -> Path:
    """Persist a bearer token for later CLI invocations."""
    path = path or token_path()
    path.write_text(token, encoding="utf-8")
    path.chmod(0o600)
    return path


def clear_token(path: Path | None = None) -> None:
    """Forget the saved bearer token."""
    path = path or token_path()
    path.unlink(missing_ok=True)


def _payload(model: BaseModel) -> dict[str, Any]:
    """Serialize a request model the way the API expects it (camelCase, only set fields)."""
    return model.model_dump(by_alias=True, exclude_unset=True, mode="json")


def _raise_for_error(response: httpx.Response) -> None:
    """Translate an error envelope into the matching application exception."""
    if response.is_success:
        return

    message = response.reason_phrase or "Request failed"
    details = None
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        message = body["error"].get("message", message)
        details = body["error"].get("details")

    exc_cls = ERROR_STATUS_MAP.get(response.status_code)
    if exc_cls is ValidationError:
        raise ValidationError(message, details=details)
    if exc_cls is not None:
        raise exc_cls(message)
    raise ExternalServiceError(f"Notes API returned {response.status_code}: {message}")


class NotesAPIClient:
    """
    HTTP client for the notes API.

    Features:
    - Base URL (including the API prefix) and timeout from application.yaml
    - Bearer token authentication
    - X-Frontend-ID header for log routing
    - Retry with exponential backoff on transport errors
    - Circuit breaker around the retried call
    - Error envelopes raised as application exceptions

    Usage:
        async with NotesAPIClient(token=load_token()) as client:
            notes = await client.list_notes(folder_id="...")
    """

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        token: str | None = None,
        frontend: str = "client",
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """
        Initialize the API client.

        Args:
            base_url: API base URL including the version prefix. If None, built from application.yaml.
            timeout: Request timeout in seconds. If None, reads timeouts.external_api.
            token: Bearer token. Can be set later with set_token().
            frontend: Value sent in X-Frontend-ID.
            transport: Optional httpx transport (ASGI or mock transports in tests).
        """
        app = get_app_config().application
        client_config = app.client

        self.base_url = (base_url or get_api_base_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else float(app.timeouts.external_api)
        self.frontend = frontend
        self.token = token
        self._transport = transport
        self._client: httpx.AsyncClient | None = None
        self._retry_config = client_config.retry
        self._breaker = create_circuit_breaker(
            "notes_api",
            fail_max=client_config.circuit_breaker.fail_max,
            timeout_duration=client_config.circuit_breaker.timeout_duration,
        )

    async def __aenter__(self) -> "NotesAPIClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    def set_token(self, token: str | None) -> None:
        """Set or clear the bearer token used by subsequent requests."""
        self.token = token

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                headers={"X-Frontend-ID": self.frontend},
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        """Send one request, retrying transport errors."""
        client = await self._get_client()
        retrying = create_retry(
            max_attempts=self._retry_config.max_attempts,
            backoff_multiplier=self._retry_config.backoff_multiplier,
            backoff_max=self._retry_config.backoff_max,
            retry_on=(httpx.TransportError,),
        )
        async for attempt in retrying:
            with attempt:
                return await client.request(method, path, **kwargs)
        raise ExternalServiceError("Notes API request was not attempted")

    async def request(self, method: str, path: str, **kwargs: Any) -> Any:
        """
        Make an API request and return the unwrapped envelope data.

        Args:
            method: HTTP method (GET, POST, etc.)
            path: Path relative to the API prefix (e.g., /notes)
            **kwargs: Additional arguments for httpx

        Raises:
            ApplicationError subclass matching the error envelope, or
            ExternalServiceError when the API cannot be reached.
        """
        headers = dict(kwargs.pop("headers", None) or {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        log_with_source(logger, self.frontend, "debug", "API request", method=method, path=path)

        try:
            response = await self._breaker.call_async(
                self._send, method, path, headers=headers, **kwargs
            )
        except aiobreaker.CircuitBreakerError as e:
            raise ExternalServiceError("Notes API is unavailable (circuit open)") from e
        except httpx.HTTPError as e:
            log_with_source(
                logger,
                self.frontend,
                "error",
                "API request failed",
                method=method,
                path=path,
                error=str(e),
            )
            raise ExternalServiceError(f"Could not reach notes API: {e}") from e

        log_with_source(
            logger,
            self.frontend,
            "debug",
            "API response",
            method=method,
            path=path,
            status_code=response.status_code,
        )

        _raise_for_error(response)
        return response.json().get("data")

    # Auth

    async def register(self, name: str, email: str, password: str) -> AuthResponse:
        """Create an account and keep its token for later requests."""
        data = await self.request(
            "POST", "/auth/register", json={"name": name, "email": email, "password": password}
        )
        auth = AuthResponse.model_validate(data)
        self.set_token(auth.token)
        return auth

    async def login(self, email: str, password: str) -> AuthResponse:
        """Log in and keep the token for later requests."""
        data = await self.request(
            "POST", "/auth/login", json={"email": email, "password": password}
        )
        auth = AuthResponse.model_validate(data)
        self.set_token(auth.token)
        return auth

    async def me(self) -> UserResponse:
        return UserResponse.model_validate(await self.request("GET", "/auth/me"))

    async def request_password_reset(self, email: str) -> str:
        data = await self.request("POST", "/auth/request-password-reset", json={"email": email})
        return data["message"]

    # Notes

    async def list_notes(
        self,
        include_deleted: bool = False,
        folder_id: str | None = None,
        favorites_only: bool = False,
        tag: str | None = None,
    ) -> list[NoteResponse]:
        params: dict[str, Any] = {}
        if include_deleted:
            params["includeDeleted"] = "true"
        if folder_id:
            params["folderId"] = folder_id
        if favorites_only:
            params["favorites"] = "true"
        if tag:
            params["tag"] = tag
        data = await self.request("GET", "/notes", params=params)
        return [NoteResponse.model_validate(item) for item in data]

    async def search_notes(self, query: str, limit: int = 50) -> list[NoteResponse]:
        data = await self.request("GET", "/notes/search", params={"q": query, "limit": limit})
        return [NoteResponse.model_validate(item) for item in data]

    async def get_note(self, note_id: str) -> NoteResponse:
        return NoteResponse.model_validate(await self.request("GET", f"/notes/{note_id}"))

    async def create_note(self, data: NoteCreate) -> NoteResponse:
        return NoteResponse.model_validate(
            await self.request("POST", "/notes", json=_payload(data))
        )

    async def update_note(self, note_id: str, data: NoteUpdate) -> NoteResponse:
        return NoteResponse.model_validate(
            await self.request("PUT", f"/notes/{note_id}", json=_payload(data))
        )

    async def move_note_to_trash(self, note_id: str) -> NoteResponse:
        return NoteResponse.model_validate(await self.request("PUT", f"/notes/{note_id}/trash"))

    async def restore_note_from_trash(self, note_id: str) -> NoteResponse:
        return NoteResponse.model_validate(await self.request("PUT", f"/notes/{note_id}/restore"))

    async def move_note_to_folder(self, note_id: str, folder_id: str | None) -> NoteResponse:
        return NoteResponse.model_validate(
            await self.request("PUT", f"/notes/{note_id}/move", json={"folderId": folder_id})
        )

    async def delete_note_permanently(self, note_id: str) -> None:
        await self.request("DELETE", f"/notes/{note_id}")

    async def empty_trash(self) -> int:
        data = await self.request("DELETE", "/notes/trash")
        return int(data["deleted"])

    # Folders

    async def list_folders(self) -> list[FolderResponse]:
        data = await self.request("GET", "/folders")
        return [FolderResponse.model_validate(item) for item in data]

    async def create_folder(self, data: FolderCreate) -> FolderResponse:
        return FolderResponse.model_validate(
            await self.request("POST", "/folders", json=_payload(data))
        )

    async def update_folder(self, folder_id: str, data: FolderUpdate) -> FolderResponse:
        return FolderResponse.model_validate(
            await self.request("PUT", f"/folders/{folder_id}", json=_payload(data))
        )

    async def delete_folder(self, folder_id: str) -> None:
        await self.request("DELETE", f"/folders/{folder_id}")
