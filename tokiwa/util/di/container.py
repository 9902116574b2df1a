"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from tokiwa.util.di import PROVIDERS, get_provider


def create_container(*extra_providers) -> AsyncContainer:
    """Build the production container from every registered provider.

    Args:
        *extra_providers: Providers appended after the production set,
            for callers that need to add or override bindings

    Returns:
        Async container wired for FastAPI requests
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider(), *extra_providers)


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    setup_dishka(container, app)
