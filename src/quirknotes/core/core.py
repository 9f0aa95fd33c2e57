from __future__ import annotations

import importlib
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any, cast
from urllib.parse import urlparse

import structlog
from pymongo import AsyncMongoClient
from pymongo.asynchronous.database import AsyncDatabase

from quirknotes.config import Config

logger = structlog.get_logger(__name__)

DEFAULT_DATABASE_NAME = "quirknotes"


class Service:
    """Base class for services with direct database access."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        self.database = database
        self._core: Core | None = None

    async def on_start(self) -> None:
        """Initialize service on application startup."""

    async def on_stop(self) -> None:
        """Cleanup service on application shutdown."""

    @property
    def core(self) -> Core:
        """Get the core application context."""
        if self._core is None:
            raise RuntimeError("Core not set for service")
        return self._core

    def set_core(self, core: Core) -> None:
        """Set the core application context."""
        self._core = core


class Services:
    """Service registry that automatically discovers and initializes services."""

    from quirknotes.core.modules.access.service import AccessService  # noqa: PLC0415
    from quirknotes.core.modules.note.service import NoteService  # noqa: PLC0415
    from quirknotes.core.modules.token.service import TokenService  # noqa: PLC0415
    from quirknotes.core.modules.user.service import UserService  # noqa: PLC0415

    user: UserService
    token: TokenService
    access: AccessService
    note: NoteService

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        """Initialize all services automatically using service configuration."""
        self._services: list[Service] = []
        self._database = database

        # (attribute_name, module_path, class_name), started in this order
        service_configs = [
            ("user", "quirknotes.core.modules.user.service", "UserService"),
            ("token", "quirknotes.core.modules.token.service", "TokenService"),
            ("access", "quirknotes.core.modules.access.service", "AccessService"),
            ("note", "quirknotes.core.modules.note.service", "NoteService"),
        ]

        for attr_name, module_path, class_name in service_configs:
            module = importlib.import_module(module_path)
            service_class = cast(type[Service], getattr(module, class_name))
            service_instance = service_class(database)
            setattr(self, attr_name, service_instance)
            self._services.append(service_instance)

    def set_core(self, core: Core) -> None:
        """Set core reference for all services."""
        for service in self._services:
            service.set_core(core)

    async def start_all(self) -> None:
        """Start all services that have startup logic."""
        for service in self._services:
            await service.on_start()

    async def stop_all(self) -> None:
        """Stop all services that have cleanup logic."""
        for service in reversed(self._services):
            await service.on_stop()


class Core:
    """Container providing config, database, and all service instances.

    The MongoDB client is created from `config.database_url` unless one is
    passed in explicitly. Either way Core owns it and closes it on shutdown.
    """

    config: Config
    mongo_client: AsyncMongoClient[dict[str, Any]]
    database: AsyncDatabase[dict[str, Any]]
    services: Services

    def __init__(self, config: Config, mongo_client: AsyncMongoClient[dict[str, Any]] | None = None) -> None:
        self.config = config
        if mongo_client is None:
            mongo_client = AsyncMongoClient(config.database_url, uuidRepresentation="standard")
        self.mongo_client = mongo_client
        self.database = self.mongo_client.get_database(database_name(config.database_url))
        self.services = Services(self.database)
        self.services.set_core(self)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Manage application lifecycle - startup and shutdown."""
        await self.on_start()
        try:
            yield
        finally:
            await self.on_stop()

    async def on_start(self) -> None:
        """Start all services on application startup."""
        await self.services.start_all()
        logger.info("core_started", database=self.database.name)

    async def on_stop(self) -> None:
        """Stop services and close MongoDB connection on shutdown."""
        await self.services.stop_all()
        await self.mongo_client.aclose()
        logger.info("core_stopped")


def database_name(database_url: str) -> str:
    """Extract the database name from a MongoDB URL path."""
    return urlparse(database_url).path[1:] or DEFAULT_DATABASE_NAME
