"""
ArangoDB access for user profiles.

One client and one database handle per process. The first call creates
the database, the `users` collection and its unique email index, so a
fresh ArangoDB needs no manual setup.
"""

from typing import Any

from arango import ArangoClient
from arango.collection import StandardCollection
from arango.database import StandardDatabase
from arango.exceptions import (
    CollectionCreateError,
    DatabaseCreateError,
    DocumentGetError,
    IndexCreateError,
)

from config.config import Settings, get_settings
from config.logging_config import get_logger

logger = get_logger(__name__)

USERS_COLLECTION = "users"

# Indexes per collection; uniqueness is enforced by the store itself
INDEXES: dict[str, list[dict[str, Any]]] = {
    USERS_COLLECTION: [
        {"type": "persistent", "fields": ["email"], "unique": True, "name": "users_email_unique"},
    ],
}

_client: ArangoClient | None = None
_db: StandardDatabase | None = None


def _credentials(settings: Settings) -> dict[str, str]:
    return {
        "username": settings.arango_username,
        "password": settings.arango_password.get_secret_value(),
    }


def get_client() -> ArangoClient:
    """Process-wide ArangoDB client."""
    global _client
    if _client is None:
        settings = get_settings()
        _client = ArangoClient(hosts=settings.arango_host)
        logger.info("ArangoDB client created", host=settings.arango_host)
    return _client


def get_database() -> StandardDatabase:
    """
    Database handle, creating the database and schema on first use.

    Raises:
        DatabaseCreateError: If the database is missing and cannot be created.
        IndexCreateError: If the unique email index cannot be created.
    """
    global _db
    if _db is not None:
        return _db

    settings = get_settings()
    client = get_client()
    name = settings.arango_database

    system = client.db("_system", **_credentials(settings))
    if not system.has_database(name):
        try:
            system.create_database(name)
        except DatabaseCreateError as e:
            logger.error("Database creation failed", database=name, error=str(e))
            raise
        logger.info("Database created", database=name)

    db = client.db(name, **_credentials(settings))
    _ensure_schema(db)
    _db = db
    logger.info("Database ready", database=name)
    return _db


def _ensure_schema(db: StandardDatabase) -> None:
    for collection, indexes in INDEXES.items():
        if not db.has_collection(collection):
            try:
                db.create_collection(collection)
                logger.info("Collection created", collection=collection)
            except CollectionCreateError as e:
                # Another worker may have created it first
                logger.warning("Collection creation failed", collection=collection, error=str(e))
        for index in indexes:
            try:
                db.collection(collection).add_index(index)
            except IndexCreateError as e:
                logger.error("Index creation failed", collection=collection, index=index["name"], error=str(e))
                raise


def collection(name: str) -> StandardCollection:
    return get_database().collection(name)


def close_connection() -> None:
    global _client, _db
    if _client is None:
        return
    _client.close()
    _client, _db = None, None
    logger.info("ArangoDB client closed")


def ping() -> bool:
    """True when the server answers a version request."""
    try:
        get_database().version()
    except Exception as e:
        logger.warning("ArangoDB unreachable", error=str(e))
        return False
    return True


def insert_document(name: str, document: dict[str, Any]) -> dict[str, Any]:
    """
    Insert one document and return it as stored.

    Raises:
        DocumentInsertError: On any write failure, including unique index violations.
    """
    stored = collection(name).insert(document, return_new=True)["new"]
    logger.debug("Document inserted", collection=name, key=stored["_key"])
    return stored


def get_document(name: str, key: str) -> dict[str, Any] | None:
    """Document by key, or None when missing or unreadable."""
    try:
        return collection(name).get(key)
    except DocumentGetError as e:
        logger.warning("Document read failed", collection=name, key=key, error=str(e))
        return None
