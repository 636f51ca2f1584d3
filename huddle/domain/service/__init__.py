"""Domain services."""

from .access_service import AccessService
from .activity_service import (
    ActivityService,
    CascadeReport,
    ValidatedFields,
    validate_activity_fields,
)
from .base import Service
from .chat_service import ChatService, normalize_message
from .jwt_service import IdentityProvider, JWTService
from .membership_service import MembershipService
from .profile_service import ProfileService

__all__ = [
    "AccessService",
    "ActivityService",
    "CascadeReport",
    "ChatService",
    "IdentityProvider",
    "JWTService",
    "MembershipService",
    "ProfileService",
    "Service",
    "ValidatedFields",
    "normalize_message",
    "validate_activity_fields",
]
