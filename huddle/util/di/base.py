"""Provider base class and mockable component names."""

from typing import ClassVar, Literal

from dishka import Provider

# The entity store is the only component tests swap out
Component = Literal["persistence"]


class ProviderBase(Provider):
    """Dishka provider carrying mock metadata.

    A provider class with subclasses is a mockable component: its
    subclasses are the production and the mock implementation, told apart
    by ``__is_mock__``. A provider class without subclasses is used as is.
    """

    __mock_component__: ClassVar[Component | None] = None
    __is_mock__: ClassVar[bool] = False
