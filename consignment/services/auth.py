"""Auth service — user records and password hashing.

Sessions and tokens are the HTTP layer's concern; this module only stores
users and checks passwords.
"""


import logging
from datetime import datetime, timezone

from passlib.context import CryptContext
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from consignment.core.config import settings
from consignment.core.exceptions import ConflictError, NotFoundError, handle_database_error
from consignment.domain.user import User
from consignment.repositories.user import UserRepository
from consignment.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)

bcrypt_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.password_hash_rounds,
)


def hash_password(password: str) -> str:
    return bcrypt_context.hash(password)


def verify_password(user: User, password: str) -> bool:
    if not user.password_hash:
        return False
    return bcrypt_context.verify(password, user.password_hash)


class AuthService:
    def __init__(self, session: AsyncSession):
        self._repo = UserRepository(session)

    async def list_users(self) -> list[User]:
        return await self._repo.list()

    async def get_user(self, user_id: str) -> User | None:
        return await self._repo.get_by_id(user_id)

    async def get_user_by_email(self, email: str) -> User | None:
        return await self._repo.get_by_email(email)

    async def _ensure_email_free(self, email: str, user_id: str | None = None) -> None:
        existing = await self._repo.get_by_email(email)
        if existing and existing.id != user_id:
            raise ConflictError(f"A user with email {email} already exists")

    async def create_user(self, data: UserCreate) -> User:
        email = data.email.strip().lower()
        await self._ensure_email_free(email)
        try:
            user = await self._repo.create(
                email=email,
                name=data.name,
                password_hash=hash_password(data.password),
                role=data.role or settings.default_user_role,
                active=True if data.active is None else data.active,
            )
        except IntegrityError as exc:
            handle_database_error(exc, "create user")
        logger.info("Created user %s (%s)", user.id, user.role)
        return user

    async def update_user(self, user_id: str, data: UserUpdate) -> User:
        if not await self._repo.get_by_id(user_id):
            raise NotFoundError("User", user_id)

        changes = {k: v for k, v in data.changes().items() if v is not None}
        password = changes.pop("password", None)
        if password:
            changes["password_hash"] = hash_password(password)
        if "email" in changes:
            changes["email"] = changes["email"].strip().lower()
            await self._ensure_email_free(changes["email"], user_id)

        try:
            updated = await self._repo.update(user_id, **changes)
        except IntegrityError as exc:
            handle_database_error(exc, "update user")
        return updated  # type: ignore[return-value]

    async def update_last_login(self, user_id: str) -> None:
        if not await self._repo.get_by_id(user_id):
            raise NotFoundError("User", user_id)
        await self._repo.update(user_id, last_login_at=datetime.now(timezone.utc))
