"""
User profile repositories.

Two interchangeable backends: ArangoDB for deployments and an in-memory
store for development and tests. Both enforce email uniqueness and write
a profile in a single operation, so a failed registration leaves nothing
behind.
"""

from datetime import datetime, timezone
from uuid import uuid4

from arango.exceptions import DocumentInsertError

from config.config import get_settings
from config.logging_config import get_logger
from database.database import USERS_COLLECTION, get_document, insert_document, ping
from models.user_models import UserProfile, UserProfileCreate

logger = get_logger(__name__)

# ArangoDB error number for a unique constraint violation
ARANGO_UNIQUE_CONSTRAINT_VIOLATED = 1210


class DuplicateEmailError(Exception):
    """Raised when registering an email that already exists."""

    def __init__(self, email: str):
        super().__init__(f"A user with email {email} already exists")
        self.email = email


class UserNotFoundError(Exception):
    """Raised when a user ID does not exist."""

    def __init__(self, user_id: str):
        super().__init__(f"User {user_id} not found")
        self.user_id = user_id


def _new_profile(data: UserProfileCreate) -> UserProfile:
    now = datetime.now(timezone.utc)
    return UserProfile(id=uuid4().hex, created_at=now, updated_at=now, **data.model_dump())


class InMemoryUserRepository:
    """Process-local user store."""

    def __init__(self):
        self._users: dict[str, UserProfile] = {}
        self._emails: dict[str, str] = {}

    def create(self, data: UserProfileCreate) -> UserProfile:
        if data.email in self._emails:
            raise DuplicateEmailError(data.email)
        profile = _new_profile(data)
        self._users[profile.id] = profile
        self._emails[profile.email] = profile.id
        logger.info("User registered", user_id=profile.id, backend="memory")
        return profile

    def get(self, user_id: str) -> UserProfile:
        profile = self._users.get(user_id)
        if profile is None:
            raise UserNotFoundError(user_id)
        return profile

    def find(self, user_id: str) -> UserProfile | None:
        return self._users.get(user_id)

    def is_available(self) -> bool:
        return True


class ArangoUserRepository:
    """User store backed by the ArangoDB `users` collection."""

    def create(self, data: UserProfileCreate) -> UserProfile:
        profile = _new_profile(data)
        document = profile.model_dump(mode="json", exclude={"id"})
        document["_key"] = profile.id
        try:
            insert_document(USERS_COLLECTION, document)
        except DocumentInsertError as e:
            if e.error_code == ARANGO_UNIQUE_CONSTRAINT_VIOLATED:
                raise DuplicateEmailError(data.email) from e
            raise
        logger.info("User registered", user_id=profile.id, backend="arango")
        return profile

    def get(self, user_id: str) -> UserProfile:
        profile = self.find(user_id)
        if profile is None:
            raise UserNotFoundError(user_id)
        return profile

    def find(self, user_id: str) -> UserProfile | None:
        document = get_document(USERS_COLLECTION, user_id)
        if document is None:
            return None
        return UserProfile(
            id=document["_key"],
            **{k: v for k, v in document.items() if not k.startswith("_")},
        )

    def is_available(self) -> bool:
        return ping()


UserRepository = InMemoryUserRepository | ArangoUserRepository

_repository_instance: UserRepository | None = None


def get_user_repository() -> UserRepository:
    """Get the singleton user repository for the configured backend."""
    global _repository_instance
    if _repository_instance is None:
        backend = get_settings().user_store_backend
        if backend == "arango":
            _repository_instance = ArangoUserRepository()
        else:
            _repository_instance = InMemoryUserRepository()
        logger.info("User repository initialized", backend=backend)
    return _repository_instance
