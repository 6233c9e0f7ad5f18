"""Wiring helpers for the catalog and preference services.

Separating the factories from the service modules keeps the latter free of
configuration concerns, so tests and scripts can build the same objects with
their own providers and stores.
"""

from __future__ import annotations

import logging

import httpx
from sqlalchemy.ext.asyncio import AsyncEngine

from lens_catalog.db.connection import create_session_factory
from lens_catalog.db.preferences_store import SqlPreferenceStore
from lens_catalog.providers.http import HttpCatalogProvider
from lens_catalog.services.catalog_service import (
    CatalogProviderProtocol,
    CatalogQueryService,
)
from lens_catalog.services.preferences import (
    PreferenceSetManager,
    PreferenceStoreProtocol,
)
from lens_catalog.settings import AppSettings, get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(settings: AppSettings | None = None) -> None:
    active_settings = settings or get_settings()
    logging.basicConfig(level=active_settings.log_level_numeric, format=LOG_FORMAT)


def validate_environment(settings: AppSettings | None = None) -> list[str]:
    """Log warnings for unset optional configuration and return them."""

    active_settings = settings or get_settings()
    warnings = active_settings.optional_config_warnings()

    if warnings:
        logger.warning("=" * 60)
        logger.warning("Environment Configuration Warnings:")
        for warning in warnings:
            logger.warning(f"  • {warning}")
        logger.warning("=" * 60)

    return warnings


def get_catalog_provider(
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> HttpCatalogProvider:
    """Provide the HTTP-backed catalog provider for ``settings``."""

    active_settings = settings or get_settings()
    return HttpCatalogProvider.from_settings(active_settings, client=client)


def get_preference_store(engine: AsyncEngine) -> SqlPreferenceStore:
    return SqlPreferenceStore(create_session_factory(engine))


def build_catalog_service(provider: CatalogProviderProtocol) -> CatalogQueryService:
    return CatalogQueryService(provider)


async def build_preference_manager(
    store: PreferenceStoreProtocol,
) -> PreferenceSetManager:
    """Return a :class:`PreferenceSetManager` already loaded from ``store``."""

    manager = PreferenceSetManager(store)
    await manager.load()
    return manager


__all__ = [
    "LOG_FORMAT",
    "build_catalog_service",
    "build_preference_manager",
    "configure_logging",
    "get_catalog_provider",
    "get_preference_store",
    "validate_environment",
]
