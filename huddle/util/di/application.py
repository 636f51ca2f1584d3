"""Application layer DI providers."""

from dishka import Scope, provide

from huddle.application.usecase.activity import (
    CreateActivityUseCase,
    EditActivityUseCase,
    EndActivityUseCase,
    GetActivityUseCase,
    GetDashboardUseCase,
)
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
from huddle.domain.service import (
    ActivityService,
    ChatService,
    MembershipService,
    ProfileService,
)
from huddle.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Activity use cases
    @provide(scope=Scope.REQUEST)
    def get_create_activity_use_case(
        self, activity_service: ActivityService
    ) -> CreateActivityUseCase:
        """Provide create activity use case."""
        return CreateActivityUseCase(activity_service=activity_service)

    @provide(scope=Scope.REQUEST)
    def get_edit_activity_use_case(
        self, activity_service: ActivityService
    ) -> EditActivityUseCase:
        """Provide edit activity use case."""
        return EditActivityUseCase(activity_service=activity_service)

    @provide(scope=Scope.REQUEST)
    def get_end_activity_use_case(
        self, activity_service: ActivityService
    ) -> EndActivityUseCase:
        """Provide end activity use case."""
        return EndActivityUseCase(activity_service=activity_service)

    @provide(scope=Scope.REQUEST)
    def get_get_activity_use_case(
        self,
        activity_service: ActivityService,
        membership_service: MembershipService,
        chat_service: ChatService,
        profile_service: ProfileService,
    ) -> GetActivityUseCase:
        """Provide get activity use case."""
        return GetActivityUseCase(
            activity_service=activity_service,
            membership_service=membership_service,
            chat_service=chat_service,
            profile_service=profile_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_get_dashboard_use_case(
        self,
        activity_service: ActivityService,
        membership_service: MembershipService,
        chat_service: ChatService,
    ) -> GetDashboardUseCase:
        """Provide get dashboard use case."""
        return GetDashboardUseCase(
            activity_service=activity_service,
            membership_service=membership_service,
            chat_service=chat_service,
        )

    # Membership use cases
    @provide(scope=Scope.REQUEST)
    def get_request_to_join_use_case(
        self, membership_service: MembershipService
    ) -> RequestToJoinUseCase:
        """Provide request to join use case."""
        return RequestToJoinUseCase(membership_service=membership_service)

    @provide(scope=Scope.REQUEST)
    def get_decide_request_use_case(
        self, membership_service: MembershipService
    ) -> DecideRequestUseCase:
        """Provide decide request use case."""
        return DecideRequestUseCase(membership_service=membership_service)

    @provide(scope=Scope.REQUEST)
    def get_reconcile_participants_use_case(
        self, membership_service: MembershipService
    ) -> ReconcileParticipantsUseCase:
        """Provide reconcile participants use case."""
        return ReconcileParticipantsUseCase(membership_service=membership_service)

    # Chat use cases
    @provide(scope=Scope.REQUEST)
    def get_send_message_use_case(self, chat_service: ChatService) -> SendMessageUseCase:
        """Provide send message use case."""
        return SendMessageUseCase(chat_service=chat_service)

    @provide(scope=Scope.REQUEST)
    def get_get_chat_use_case(
        self, chat_service: ChatService, activity_service: ActivityService
    ) -> GetChatUseCase:
        """Provide get chat use case."""
        return GetChatUseCase(
            chat_service=chat_service, activity_service=activity_service
        )

    # Profile use cases
    @provide(scope=Scope.REQUEST)
    def get_create_profile_use_case(
        self, profile_service: ProfileService
    ) -> CreateProfileUseCase:
        """Provide create profile use case."""
        return CreateProfileUseCase(profile_service=profile_service)

    @provide(scope=Scope.REQUEST)
    def get_update_profile_use_case(
        self, profile_service: ProfileService
    ) -> UpdateProfileUseCase:
        """Provide update profile use case."""
        return UpdateProfileUseCase(profile_service=profile_service)

    @provide(scope=Scope.REQUEST)
    def get_get_profile_use_case(
        self, profile_service: ProfileService
    ) -> GetProfileUseCase:
        """Provide get profile use case."""
        return GetProfileUseCase(profile_service=profile_service)
