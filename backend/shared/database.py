"""
Database client factory for MongoDB.

Provides a lazily created, process-wide async client and helpers to reach
collections wrapped in the IDocumentCollection contract.
"""

import logging
from typing import Optional

from pymongo import ASCENDING, AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase
from pymongo.errors import PyMongoError

from .collection import MongoCollection
from .config import get_settings

logger = logging.getLogger(__name__)

# Module-level client cache
_client: Optional[AsyncMongoClient] = None


def get_mongo_client() -> AsyncMongoClient:
    """
    Get the shared MongoDB client.

    Returns:
        AsyncMongoClient configured from MONGO_URI
    """
    global _client

    if _client is None:
        settings = get_settings()
        if not settings.mongo_uri:
            raise RuntimeError(
                "MongoDB configuration missing. "
                "Set the MONGO_URI environment variable."
            )
        _client = AsyncMongoClient(settings.mongo_uri, tz_aware=True)

    return _client


def get_database() -> AsyncDatabase:
    """Get the application database."""
    return get_mongo_client()[get_settings().mongo_db_name]


def get_collection(name: str) -> MongoCollection:
    """Get a collection wrapped in the IDocumentCollection contract."""
    return MongoCollection(get_database()[name])


async def ensure_indexes() -> None:
    """Create the unique indexes the services rely on."""
    db = get_database()
    await db["users"].create_index([("email", ASCENDING)], unique=True)
    await db["bootcamps"].create_index([("name", ASCENDING)], unique=True)
    await db["bootcamps"].create_index([("slug", ASCENDING)], unique=True)
    await db["reviews"].create_index(
        [("bootcamp", ASCENDING), ("user", ASCENDING)],
        unique=True,
    )
    logger.info("MongoDB indexes ensured on %s", db.name)


async def ping() -> bool:
    """Whether the database answers a ping."""
    try:
        await get_mongo_client().admin.command("ping")
    except PyMongoError as e:
        logger.warning("MongoDB ping failed: %s", e)
        return False
    return True


async def close_client() -> None:
    """Close the shared client if one was created."""
    global _client
    if _client is not None:
        await _client.close()
        _client = None


def reset_client_cache() -> None:
    """
    Reset the cached database client.

    Useful for testing or when configuration changes.
    """
    global _client
    _client = None
