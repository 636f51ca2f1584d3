"""Production container and its FastAPI hookup."""

from dishka import AsyncContainer, Provider, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from huddle.util.di import PROVIDERS, get_provider


def create_container(*extra_providers: Provider) -> AsyncContainer:
    """Build the container used by the running API.

    Every component gets its production implementation: the Postgres
    entity store, or the in-memory one under ``STORE__BACKEND=memory``.

    Args:
        extra_providers: Providers added after the standard ones
    """
    providers = [get_provider(base)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider(), *extra_providers)


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach a container to an app.

    Routes resolve their dependencies from it and the chat stream opens
    its own request scope on ``app.state.dishka_container``.
    """
    setup_dishka(container, app)
