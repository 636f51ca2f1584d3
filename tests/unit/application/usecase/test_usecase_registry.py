"""Unit tests for the use case hierarchy."""

import pytest

from huddle.application.usecase.activity import (
    CreateActivityUseCase,
    EditActivityUseCase,
    EndActivityUseCase,
    GetActivityUseCase,
    GetDashboardUseCase,
)
from huddle.application.usecase.base import BaseUseCase
from huddle.application.usecase.chat import GetChatUseCase, SendMessageUseCase
from huddle.application.usecase.membership import (
    DecideRequestUseCase,
    ReconcileParticipantsUseCase,
    RequestToJoinUseCase,
)
from huddle.application.usecase.profile import (
    CreateProfileUseCase,
    GetProfileUseCase,
    UpdateProfileUseCase,
)
from tests.harness import create_env_fixture

USE_CASES = [
    CreateActivityUseCase,
    EditActivityUseCase,
    EndActivityUseCase,
    GetActivityUseCase,
    GetDashboardUseCase,
    GetChatUseCase,
    SendMessageUseCase,
    DecideRequestUseCase,
    ReconcileParticipantsUseCase,
    RequestToJoinUseCase,
    CreateProfileUseCase,
    GetProfileUseCase,
    UpdateProfileUseCase,
]

# Unit test fixture
unit_env = create_env_fixture()


class TestUseCases:
    """Every use case shares the execute contract and is wired in DI."""

    @pytest.mark.parametrize("use_case", USE_CASES)
    def test_subclasses_base(self, use_case):
        assert issubclass(use_case, BaseUseCase)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("use_case", USE_CASES)
    async def test_resolvable(self, unit_env, use_case):
        assert isinstance(await unit_env.get(use_case), use_case)
