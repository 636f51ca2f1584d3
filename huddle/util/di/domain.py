"""Domain layer DI providers."""

from dishka import Scope, provide

from huddle.config import ActivitySettings, AuthSettings, ProfileSettings
from huddle.domain.repository import (
    ActivityRepository,
    ChatRepository,
    JoinRequestRepository,
    MessageRepository,
    ProfileRepository,
)
from huddle.domain.service import (
    AccessService,
    ActivityService,
    ChatService,
    IdentityProvider,
    JWTService,
    MembershipService,
    ProfileService,
)
from huddle.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped, like the repositories they wrap.
    """

    scope = Scope.REQUEST

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide identity token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_identity_provider(self, jwt_service: JWTService) -> IdentityProvider:
        """Provide the identity provider backed by JWT cookies."""
        return jwt_service

    @provide
    def get_profile_service(
        self,
        profile_repository: ProfileRepository,
        profile_settings: ProfileSettings,
    ) -> ProfileService:
        """Provide profile domain service."""
        return ProfileService(
            profile_repository=profile_repository, profile_settings=profile_settings
        )

    @provide
    def get_access_service(
        self,
        activity_repository: ActivityRepository,
        join_request_repository: JoinRequestRepository,
        chat_repository: ChatRepository,
    ) -> AccessService:
        """Provide chat access domain service."""
        return AccessService(
            activity_repository=activity_repository,
            join_request_repository=join_request_repository,
            chat_repository=chat_repository,
        )

    @provide
    def get_membership_service(
        self,
        join_request_repository: JoinRequestRepository,
        activity_repository: ActivityRepository,
        chat_repository: ChatRepository,
    ) -> MembershipService:
        """Provide join request domain service."""
        return MembershipService(
            join_request_repository=join_request_repository,
            activity_repository=activity_repository,
            chat_repository=chat_repository,
        )

    @provide
    def get_activity_service(
        self,
        activity_repository: ActivityRepository,
        chat_repository: ChatRepository,
        join_request_repository: JoinRequestRepository,
        message_repository: MessageRepository,
        activity_settings: ActivitySettings,
    ) -> ActivityService:
        """Provide activity lifecycle domain service."""
        return ActivityService(
            activity_repository=activity_repository,
            chat_repository=chat_repository,
            join_request_repository=join_request_repository,
            message_repository=message_repository,
            activity_settings=activity_settings,
        )

    @provide
    def get_chat_service(
        self,
        chat_repository: ChatRepository,
        message_repository: MessageRepository,
        access_service: AccessService,
        profile_service: ProfileService,
    ) -> ChatService:
        """Provide chat domain service."""
        return ChatService(
            chat_repository=chat_repository,
            message_repository=message_repository,
            access_service=access_service,
            profile_service=profile_service,
        )
