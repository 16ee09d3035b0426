"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
an in-memory document store standing in for MongoDB, a controllable clock,
a recording notifier and an application wired to all three.
"""

# The application must be imported before any routes module
from api.app import create_app

import asyncio
import copy
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable, Optional

import pytest
from bson import ObjectId
from fastapi.testclient import TestClient
from pymongo.errors import DuplicateKeyError

from api.dependencies import ServiceContainer, get_container
from shared.collection import Document, IDocumentCollection, to_object_id
from shared.config import Settings
from modules.auth.models import Role


TEST_JWT_SECRET = "test-secret-key-for-testing-only"

# Unique indexes created by shared.database.ensure_indexes
UNIQUE_INDEXES = {
    "users": [("email",)],
    "bootcamps": [("name",), ("slug",)],
    "reviews": [("bootcamp", "user")],
}

_MISSING = object()


def _compare(op: str, value: Any, argument: Any) -> bool:
    if op == "$eq":
        return _equals(value, argument)
    if op == "$ne":
        return not _equals(value, argument)
    if op == "$in":
        return any(_equals(value, item) for item in argument)
    if value is _MISSING or value is None:
        return False
    try:
        if op == "$gt":
            return value > argument
        if op == "$gte":
            return value >= argument
        if op == "$lt":
            return value < argument
        if op == "$lte":
            return value <= argument
    except TypeError:
        return False
    raise ValueError(f"Unsupported operator {op}")


def _equals(value: Any, expected: Any) -> bool:
    if isinstance(value, list) and not isinstance(expected, list):
        return expected in value
    return value == expected


def _matches(document: Document, filter: Document) -> bool:
    for field, condition in filter.items():
        value = document.get(field, _MISSING)
        if isinstance(condition, dict) and condition and all(k.startswith("$") for k in condition):
            if not all(_compare(op, value, arg) for op, arg in condition.items()):
                return False
        elif not _equals(value, condition):
            return False
    return True


class InMemoryCollection(IDocumentCollection):
    """
    IDocumentCollection kept in a list.

    Supports the filter operators the services use and enforces the
    same unique indexes as the MongoDB deployment.
    """

    def __init__(self, name: str, unique: Iterable[tuple[str, ...]] = ()):
        self.name = name
        self.documents: list[Document] = []
        self._unique = list(unique)

    def _check_unique(self, candidate: Document) -> None:
        for fields in self._unique:
            key = tuple(candidate.get(f) for f in fields)
            if any(part is None for part in key):
                continue
            for other in self.documents:
                if other["_id"] == candidate["_id"]:
                    continue
                if tuple(other.get(f) for f in fields) == key:
                    raise DuplicateKeyError(
                        f"E11000 duplicate key error collection: {self.name}",
                        11000,
                        {"keyValue": dict(zip(fields, key))},
                    )

    def _get(self, document_id: Any) -> Optional[Document]:
        object_id = to_object_id(document_id)
        for document in self.documents:
            if document["_id"] == object_id:
                return document
        return None

    async def count(self, filter: Document) -> int:
        return sum(1 for d in self.documents if _matches(d, filter))

    async def find(
        self,
        filter: Document,
        projection: Optional[list[str]] = None,
        sort: Optional[list[tuple[str, int]]] = None,
        skip: int = 0,
        limit: int = 0,
    ) -> list[Document]:
        found = [d for d in self.documents if _matches(d, filter)]
        for field, direction in reversed(sort or []):
            found.sort(
                key=lambda d: (d.get(field) is not None, d.get(field)),
                reverse=direction < 0,
            )
        found = found[skip:]
        if limit:
            found = found[:limit]
        return [self._project(d, projection) for d in found]

    def _project(self, document: Document, projection: Optional[list[str]]) -> Document:
        if not projection:
            return copy.deepcopy(document)
        keep = {"_id", *projection}
        return copy.deepcopy({k: v for k, v in document.items() if k in keep})

    async def find_one(
        self,
        filter: Document,
        projection: Optional[list[str]] = None,
    ) -> Optional[Document]:
        for document in self.documents:
            if _matches(document, filter):
                return self._project(document, projection)
        return None

    async def find_by_id(self, document_id: Any) -> Optional[Document]:
        document = self._get(document_id)
        return copy.deepcopy(document) if document is not None else None

    async def insert(self, document: Document) -> Document:
        document = copy.deepcopy(document)
        document.setdefault("_id", ObjectId())
        self._check_unique(document)
        self.documents.append(document)
        return copy.deepcopy(document)

    async def update_by_id(
        self,
        document_id: Any,
        fields: Document,
        unset: Iterable[str] = (),
    ) -> Optional[Document]:
        document = self._get(document_id)
        if document is None:
            return None
        candidate = {**document, **copy.deepcopy(fields)}
        for field in unset:
            candidate.pop(field, None)
        self._check_unique(candidate)
        document.clear()
        document.update(candidate)
        return copy.deepcopy(document)

    async def delete_by_id(self, document_id: Any) -> bool:
        document = self._get(document_id)
        if document is None:
            return False
        self.documents.remove(document)
        return True

    async def delete_many(self, filter: Document) -> int:
        kept = [d for d in self.documents if not _matches(d, filter)]
        deleted = len(self.documents) - len(kept)
        self.documents = kept
        return deleted


class InMemoryDatabase:
    """Collection factory handing out one InMemoryCollection per name."""

    def __init__(self):
        self.collections: dict[str, InMemoryCollection] = {}

    def __call__(self, name: str) -> InMemoryCollection:
        if name not in self.collections:
            self.collections[name] = InMemoryCollection(name, UNIQUE_INDEXES.get(name, ()))
        return self.collections[name]


class FakeClock:
    """A clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


class RecordingNotifier:
    """Collects sent messages; raises on send when `fail` is set."""

    def __init__(self):
        self.sent: list[dict[str, str]] = []
        self.fail = False

    async def send(self, to: str, subject: str, message: str) -> None:
        if self.fail:
            raise ConnectionError("SMTP server unavailable")
        self.sent.append({"to": to, "subject": subject, "message": message})


@pytest.fixture
def settings() -> Settings:
    """Settings for tests: known secret, cheap bcrypt."""
    return Settings(
        _env_file=None,
        jwt_secret=TEST_JWT_SECRET,
        bcrypt_rounds=4,
        mongo_uri="",
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock(datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def database() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def container(settings, database, notifier, clock) -> ServiceContainer:
    """Service container wired to the in-memory store."""
    return ServiceContainer(
        settings=settings,
        collection_factory=database,
        notifier=notifier,
        clock=clock,
    )


@pytest.fixture
def app(container):
    application = create_app()
    application.dependency_overrides[get_container] = lambda: container
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def make_account(container):
    """
    Create an account directly in the store and return (account, headers).

    Usage:
        admin, headers = make_account(Role.ADMIN)
    """
    counter = iter(range(1, 1000))

    def _make(role: Role = Role.USER, email: Optional[str] = None, password: str = "123456"):
        n = next(counter)
        email = email or f"{role.value}{n}@example.com"

        async def _create():
            from modules.auth.passwords import hash_password_async

            return await container.user_repository.create(
                name=f"{role.value.title()} {n}",
                email=email,
                password_hash=await hash_password_async(password, 4),
                role=role,
            )

        account = asyncio.run(_create())
        token = container.tokens.issue(account.id)
        return account, {"Authorization": f"Bearer {token}"}

    return _make
