"""
Auth Service.

Registration, login, and resolving bearer tokens to users. Password
reset delivery is out of scope; the reset request only acknowledges.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from voicenotes.backend.core.exceptions import AuthenticationError, ConflictError
from voicenotes.backend.core.security import (
    create_access_token,
    get_token_subject,
    hash_password,
    verify_password,
)
from voicenotes.backend.models.user import User
from voicenotes.backend.repositories.user import UserRepository
from voicenotes.backend.schemas.auth import LoginRequest, RegisterRequest
from voicenotes.backend.services.base import BaseService

PASSWORD_RESET_ACK = (
    "If an account with that email exists, a password reset link has been sent"
)


class AuthService(BaseService):
    """Service for account and token logic."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)
        self.repo = UserRepository(session)

    @staticmethod
    def _issue_token(user: User) -> str:
        return create_access_token({"sub": user.id, "email": user.email})

    async def register(self, data: RegisterRequest) -> tuple[User, str]:
        """
        Create an account and return it with a fresh access token.

        Raises:
            ConflictError: If the email is already registered
        """
        email = data.email.lower()
        if await self.repo.exists_by_email(email):
            raise ConflictError("User already exists")

        self._log_operation("Registering user", email=email)
        user = await self._execute_db_operation(
            "register_user",
            self.repo.create(
                email=email,
                name=data.name,
                hashed_password=hash_password(data.password),
            ),
        )
        return user, self._issue_token(user)

    async def login(self, data: LoginRequest) -> tuple[User, str]:
        """
        Check credentials and return the user with a fresh access token.

        Raises:
            AuthenticationError: On unknown email or wrong password
        """
        user = await self.repo.get_by_email(data.email)
        if user is None or not verify_password(data.password, user.hashed_password):
            self._logger.warning("Login failed", extra={"email": data.email})
            raise AuthenticationError("Invalid credentials")

        self._log_operation("User logged in", user_id=user.id)
        return user, self._issue_token(user)

    async def resolve_identity(self, token: str) -> User:
        """
        Resolve a bearer token to an existing user.

        Raises:
            AuthenticationError: If the token is invalid or the user is gone
        """
        user_id = get_token_subject(token)
        user = await self.repo.get_by_id_or_none(user_id)
        if user is None:
            raise AuthenticationError("Invalid or expired token")
        return user

    async def request_password_reset(self, email: str) -> str:
        """Acknowledge a reset request without revealing whether the account exists."""
        user = await self.repo.get_by_email(email)
        self._log_debug("Password reset requested", known_account=user is not None)
        return PASSWORD_RESET_ACK
