"""Use case base class."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """One API operation composed from domain services.

    ``execute`` takes a request model and returns a response model; domain
    errors propagate to the interface layer unchanged.
    """

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
