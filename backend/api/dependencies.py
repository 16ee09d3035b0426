"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. Route handlers receive services through the dependency
functions at the bottom of this file, all of which resolve through
get_container() so tests can swap the whole graph with one override.
"""

from datetime import timedelta
from typing import TYPE_CHECKING, Callable, Optional

from fastapi import Depends, Request

from shared.collection import IDocumentCollection
from shared.config import Settings, get_settings
from shared.repository import Clock, utcnow
from modules.query import QueryPlan, translate_query

# Type checking imports for services (avoids circular imports)
if TYPE_CHECKING:
    from modules.auth.interfaces import IAuthService, INotificationService
    from modules.auth.repository import UserRepository
    from modules.auth.tokens import TokenCodec
    from modules.bootcamps.repository import BootcampRepository
    from modules.bootcamps.service import BootcampService
    from modules.courses.service import CourseService
    from modules.reviews.service import ReviewService
    from modules.users.service import UserAdminService


CollectionFactory = Callable[[str], IDocumentCollection]


class ServiceContainer:
    """
    Container for all service instances.

    This class manages the lifecycle of service instances and their
    dependencies. Services are created lazily on first access.

    All services are cached as singletons within the container.
    Use reset() to clear all cached services for testing.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        collection_factory: Optional[CollectionFactory] = None,
        notifier: "Optional[INotificationService]" = None,
        clock: Clock = utcnow,
    ) -> None:
        self._settings = settings
        self._collection_factory = collection_factory
        self._notifier = notifier
        self._clock = clock
        self._collections: dict[str, IDocumentCollection] = {}
        self._tokens: "TokenCodec | None" = None
        self._user_repository: "UserRepository | None" = None
        self._auth_service: "IAuthService | None" = None
        self._bootcamp_repository: "BootcampRepository | None" = None
        self._bootcamp_service: "BootcampService | None" = None
        self._course_service: "CourseService | None" = None
        self._review_service: "ReviewService | None" = None
        self._user_admin_service: "UserAdminService | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    def collection(self, name: str) -> IDocumentCollection:
        """Get a collection by name, created once per container."""
        if name not in self._collections:
            if self._collection_factory is None:
                from shared.database import get_collection
                self._collection_factory = get_collection
            self._collections[name] = self._collection_factory(name)
        return self._collections[name]

    @property
    def tokens(self) -> "TokenCodec":
        """Get the session token codec."""
        if self._tokens is None:
            from modules.auth.tokens import TokenCodec
            self._tokens = TokenCodec(
                secret=self.settings.jwt_secret,
                expires_in=timedelta(days=self.settings.jwt_expire_days),
                algorithm=self.settings.jwt_algorithm,
                clock=self._clock,
            )
        return self._tokens

    @property
    def notifier(self) -> "INotificationService":
        if self._notifier is None:
            from modules.auth.notifications import LoggingNotificationService
            self._notifier = LoggingNotificationService()
        return self._notifier

    @property
    def user_repository(self) -> "UserRepository":
        if self._user_repository is None:
            from modules.auth.repository import UserRepository
            self._user_repository = UserRepository(self.collection("users"), self._clock)
        return self._user_repository

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                store=self.user_repository,
                tokens=self.tokens,
                notifier=self.notifier,
                clock=self._clock,
                bcrypt_rounds=self.settings.bcrypt_rounds,
            )
        return self._auth_service

    @property
    def bootcamp_repository(self) -> "BootcampRepository":
        if self._bootcamp_repository is None:
            from modules.bootcamps.repository import BootcampRepository
            self._bootcamp_repository = BootcampRepository(
                self.collection("bootcamps"), self._clock
            )
        return self._bootcamp_repository

    @property
    def bootcamps(self) -> "BootcampService":
        """Get the bootcamp service instance."""
        if self._bootcamp_service is None:
            from modules.bootcamps.service import BootcampService
            self._bootcamp_service = BootcampService(
                repository=self.bootcamp_repository,
                courses=self.collection("courses"),
                reviews=self.collection("reviews"),
            )
        return self._bootcamp_service

    @property
    def courses(self) -> "CourseService":
        """Get the course service instance."""
        if self._course_service is None:
            from modules.courses.repository import CourseRepository
            from modules.courses.service import CourseService
            self._course_service = CourseService(
                repository=CourseRepository(self.collection("courses"), self._clock),
                bootcamps=self.bootcamp_repository,
            )
        return self._course_service

    @property
    def reviews(self) -> "ReviewService":
        """Get the review service instance."""
        if self._review_service is None:
            from modules.reviews.repository import ReviewRepository
            from modules.reviews.service import ReviewService
            self._review_service = ReviewService(
                repository=ReviewRepository(self.collection("reviews"), self._clock),
                bootcamps=self.bootcamp_repository,
            )
        return self._review_service

    @property
    def user_admin(self) -> "UserAdminService":
        """Get the user administration service instance."""
        if self._user_admin_service is None:
            from modules.users.service import UserAdminService
            self._user_admin_service = UserAdminService(
                repository=self.user_repository,
                bcrypt_rounds=self.settings.bcrypt_rounds,
            )
        return self._user_admin_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different mock dependencies.
        """
        self._collections = {}
        self._tokens = None
        self._user_repository = None
        self._auth_service = None
        self._bootcamp_repository = None
        self._bootcamp_service = None
        self._course_service = None
        self._review_service = None
        self._user_admin_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    This clears the cached container, so the next call to get_container()
    will create a fresh container with new service instances.

    Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_app_settings(container: ServiceContainer = Depends(get_container)) -> Settings:
    """FastAPI dependency for the settings the container was built with."""
    return container.settings


def get_auth_service(container: ServiceContainer = Depends(get_container)) -> "IAuthService":
    """FastAPI dependency for auth service."""
    return container.auth


def get_bootcamp_service(container: ServiceContainer = Depends(get_container)) -> "BootcampService":
    """FastAPI dependency for bootcamp service."""
    return container.bootcamps


def get_course_service(container: ServiceContainer = Depends(get_container)) -> "CourseService":
    """FastAPI dependency for course service."""
    return container.courses


def get_review_service(container: ServiceContainer = Depends(get_container)) -> "ReviewService":
    """FastAPI dependency for review service."""
    return container.reviews


def get_user_admin_service(container: ServiceContainer = Depends(get_container)) -> "UserAdminService":
    """FastAPI dependency for user administration service."""
    return container.user_admin


def get_query_plan(
    request: Request,
    settings: Settings = Depends(get_app_settings),
) -> QueryPlan:
    """
    FastAPI dependency translating the query string of a list request.

    Page size defaults and the upper bound come from settings.
    """
    return translate_query(
        request.query_params,
        default_limit=settings.default_page_size,
        max_limit=settings.max_page_size,
    )
