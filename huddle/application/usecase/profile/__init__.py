"""Profile use cases."""

from .common import ProfileResponse
from .create_profile import CreateProfileRequest, CreateProfileUseCase
from .get_profile import GetProfileRequest, GetProfileUseCase
from .update_profile import UpdateProfileRequest, UpdateProfileUseCase

__all__ = [
    "CreateProfileRequest",
    "CreateProfileUseCase",
    "GetProfileRequest",
    "GetProfileUseCase",
    "ProfileResponse",
    "UpdateProfileRequest",
    "UpdateProfileUseCase",
]
