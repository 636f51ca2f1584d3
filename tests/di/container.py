"""Test container builder."""

from dishka import AsyncContainer, Provider, make_async_container

from huddle.util.di import PROVIDERS, Component, get_provider


def mockable_components() -> set[Component]:
    """Names of the components that have a mock implementation."""
    return {
        base.__mock_component__
        for base in PROVIDERS
        if base.__subclasses__() and base.__mock_component__
    }


def build_test_container(
    unmock: set[Component] | None = None, *extra_providers: Provider
) -> AsyncContainer:
    """Build a container with mocks for every component not unmocked.

    Settings still come from the environment.

    Args:
        unmock: Components to use production implementations for
        extra_providers: Additional providers, e.g. ``FastapiProvider()``
            for tests that go through the HTTP layer

    Returns:
        Configured test container

    Raises:
        ValueError: If an unknown component is named

    Examples:
        # Unit tests: in-memory entity store
        container = build_test_container()

        # Integration tests: PostgreSQL entity store
        container = build_test_container(unmock={"persistence"})
    """
    unmock = unmock or set()
    unknown = unmock - mockable_components()
    if unknown:
        raise ValueError(f"Unknown components: {unknown}")

    providers = []
    for base in PROVIDERS:
        use_mock = (
            base.__mock_component__ is not None
            and base.__mock_component__ not in unmock
        )
        providers.append(get_provider(base, use_mock=use_mock)())

    return make_async_container(*providers, *extra_providers)
