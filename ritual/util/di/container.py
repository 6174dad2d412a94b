"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container

from ritual.config import Settings
from ritual.util.di import PROVIDERS, get_provider
from ritual.util.logging import setup_logging
from ritual.util.observability import configure_logfire


def create_container() -> AsyncContainer:
    """Build production container (all prod implementations).

    Settings are loaded from environment variables automatically.

    Returns:
        Configured DI container with production providers
    """
    settings = Settings()
    configure_logfire(settings)
    setup_logging(settings)
    provider_instances = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*provider_instances)
