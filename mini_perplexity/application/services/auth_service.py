"""
Authentication service.

Credential signup and login. Passwords are hashed with bcrypt through
passlib; hashing runs in the threadpool since bcrypt is deliberately slow.

Dependencies: passlib, sqlalchemy, mini_perplexity.boundary.db.CRUD
System role: Account use case orchestration
"""

import logging
import re

from fastapi.concurrency import run_in_threadpool
from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from mini_perplexity.boundary.db.CRUD.user_crud import user_crud
from mini_perplexity.boundary.db.models.user_model import UserModel
from mini_perplexity.configs.auth import AuthSettings
from mini_perplexity.core.exceptions import (
    AuthenticationError,
    UserAlreadyExistsError,
    ValidationError,
)

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def build_password_context(settings: AuthSettings) -> CryptContext:
    """bcrypt hashing context with the configured cost factor."""
    return CryptContext(
        schemes=["bcrypt"],
        deprecated="auto",
        bcrypt__rounds=settings.bcrypt_rounds,
    )


class AuthService:
    """Signup and login against the users table."""

    def __init__(
        self,
        db: AsyncSession,
        settings: AuthSettings | None = None,
        pwd_context: CryptContext | None = None,
    ) -> None:
        """
        Initialize auth service.

        Args:
            db: Async SQLAlchemy session
            settings: Credential policy, defaults from environment
            pwd_context: Hashing context, built from settings when omitted
        """
        self.db = db
        self.settings = settings or AuthSettings()
        self.pwd_context = pwd_context or build_password_context(self.settings)

    def _validate(self, email: str | None, password: str | None) -> str:
        email = (email or "").strip().lower()
        if not EMAIL_PATTERN.match(email):
            raise ValidationError("Invalid email address", field="email")
        if not password or len(password) < self.settings.password_min_length:
            raise ValidationError(
                f"Password must be at least {self.settings.password_min_length} characters",
                field="password",
            )
        return email

    async def signup(self, email: str | None, password: str | None, name: str | None = None) -> UserModel:
        """
        Register a new user.

        Args:
            email: Email address (case-insensitive, unique)
            password: Plain password
            name: Optional display name

        Returns:
            UserModel: Created user

        Raises:
            ValidationError: If email or password is invalid
            UserAlreadyExistsError: If the email is already registered
        """
        email = self._validate(email, password)
        if await user_crud.get_by_email(self.db, email) is not None:
            raise UserAlreadyExistsError(email)

        password_hash = await run_in_threadpool(self.pwd_context.hash, password)
        try:
            user = await user_crud.create(self.db, email=email, name=name, password_hash=password_hash)
            await self.db.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent signup for the same email
            await self.db.rollback()
            raise UserAlreadyExistsError(email) from e
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        logger.info(f"{__name__}:signup - Registered user {user.id}")
        return user

    async def authenticate(self, email: str | None, password: str | None) -> UserModel:
        """
        Check credentials.

        Args:
            email: Email address
            password: Plain password

        Returns:
            UserModel: The matching user

        Raises:
            AuthenticationError: If the user is unknown or the password is wrong
        """
        if not email or not password:
            raise AuthenticationError()
        user = await user_crud.get_by_email(self.db, email)
        if user is None:
            raise AuthenticationError()
        valid = await run_in_threadpool(self.pwd_context.verify, password, user.password_hash)
        if not valid:
            logger.info(f"{__name__}:authenticate - Invalid password for user {user.id}")
            raise AuthenticationError()
        return user
