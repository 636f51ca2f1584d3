"""Unit tests for the profile use cases."""

import pytest

from huddle.application.usecase.profile import (
    CreateProfileRequest,
    CreateProfileUseCase,
    GetProfileRequest,
    GetProfileUseCase,
    UpdateProfileRequest,
    UpdateProfileUseCase,
)
from huddle.domain.error import NotFoundError, ValidationError
from huddle.domain.value import Identity
from tests.conftest import ALICE, BOB, image_data_url
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestUpdateProfile:
    """Tests for UpdateProfileUseCase."""

    @pytest.mark.asyncio
    async def test_update_username_and_image(self, unit_env):
        create = await unit_env.get(CreateProfileUseCase)
        update = await unit_env.get(UpdateProfileUseCase)
        get = await unit_env.get(GetProfileUseCase)
        await create.execute(
            CreateProfileRequest(
                identity=Identity(id=ALICE, display_name="Alice"), username="alice_w"
            )
        )
        image = image_data_url()

        updated = await update.execute(
            UpdateProfileRequest(
                user_id=ALICE, username="alice_x", profile_image=image
            )
        )
        removed = await update.execute(
            UpdateProfileRequest(user_id=ALICE, remove_profile_image=True)
        )
        fetched = await get.execute(GetProfileRequest(user_id=ALICE))

        assert updated.username == "alice_x"
        assert updated.profile_image == image
        assert removed.profile_image is None
        assert fetched.username == "alice_x"
        assert fetched.name == "Alice"

    @pytest.mark.asyncio
    async def test_invalid_username(self, unit_env):
        create = await unit_env.get(CreateProfileUseCase)
        update = await unit_env.get(UpdateProfileUseCase)
        await create.execute(
            CreateProfileRequest(identity=Identity(id=ALICE), username="alice_w")
        )

        with pytest.raises(ValidationError):
            await update.execute(UpdateProfileRequest(user_id=ALICE, username="x"))

    @pytest.mark.asyncio
    async def test_missing_profile(self, unit_env):
        get = await unit_env.get(GetProfileUseCase)

        with pytest.raises(NotFoundError):
            await get.execute(GetProfileRequest(user_id=BOB))
