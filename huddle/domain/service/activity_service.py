"""Activity lifecycle domain service."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Awaitable, Callable, Optional

import logfire

from huddle.config import ActivitySettings
from huddle.domain.error import (
    ForbiddenError,
    NotFoundError,
    PartialFailureError,
    ValidationError,
)
from huddle.domain.model import Activity, Chat
from huddle.domain.repository import (
    ActivityRepository,
    ChatRepository,
    JoinRequestRepository,
    MessageRepository,
)
from huddle.domain.value import (
    DESCRIPTION_MAX_LENGTH,
    TITLE_MAX_LENGTH,
    ActivityFields,
    ActivityId,
    ChatId,
    UserId,
)

from .base import Service


@dataclass
class CascadeReport:
    """Outcome of ending an activity.

    Counts are what this run removed; a rerun after a crash reports only
    the leftovers it found.
    """

    activity_id: ActivityId
    already_ended: bool = False
    join_requests_deleted: int = 0
    messages_deleted: int = 0
    chat_deleted: bool = False
    activity_deleted: bool = False
    completed_steps: list[str] = field(default_factory=list)


@dataclass
class ValidatedFields:
    """Trimmed activity fields that passed validation."""

    title: str
    description: Optional[str]
    image_url: Optional[str]
    max_participants: Optional[int]


def _blank_to_none(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def validate_activity_fields(fields: ActivityFields) -> ValidatedFields:
    """Trim and validate host-editable activity fields.

    Raises:
        ValidationError: If the title is blank or a field is too long
    """
    title = fields.title.strip()
    if not title:
        raise ValidationError("Title is required")
    if len(title) > TITLE_MAX_LENGTH:
        raise ValidationError(f"Title must be at most {TITLE_MAX_LENGTH} characters")

    description = _blank_to_none(fields.description)
    if description and len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(
            f"Description must be at most {DESCRIPTION_MAX_LENGTH} characters"
        )

    if fields.max_participants is not None and fields.max_participants < 1:
        raise ValidationError("Max participants must be at least 1")

    return ValidatedFields(
        title=title,
        description=description,
        image_url=_blank_to_none(fields.image_url),
        max_participants=fields.max_participants,
    )


class ActivityService(Service):
    """Domain service for creating, editing and ending activities."""

    def __init__(
        self,
        activity_repository: ActivityRepository,
        chat_repository: ChatRepository,
        join_request_repository: JoinRequestRepository,
        message_repository: MessageRepository,
        activity_settings: ActivitySettings,
    ) -> None:
        """Initialize activity service.

        Args:
            activity_repository: Activity repository
            chat_repository: Chat repository
            join_request_repository: Join request repository
            message_repository: Message repository
            activity_settings: Activity defaults
        """
        self.activity_repository = activity_repository
        self.chat_repository = chat_repository
        self.join_request_repository = join_request_repository
        self.message_repository = message_repository
        self.activity_settings = activity_settings

    async def get_activity(self, activity_id: ActivityId) -> Activity:
        """Get an activity.

        Raises:
            NotFoundError: If the activity does not exist
        """
        with logfire.span("activity_service.get_activity", activity_id=activity_id):
            activity = await self.activity_repository.find_by_id(activity_id)
            if not activity:
                logfire.warn("Activity not found", activity_id=activity_id)
                raise NotFoundError("Activity", activity_id)
            return activity

    async def get_activities(
        self, activity_ids: list[ActivityId]
    ) -> dict[ActivityId, Activity]:
        """Batch lookup of activities; missing ones are left out."""
        return await self.activity_repository.find_many(activity_ids)

    async def list_hosted_activities(self, host_id: UserId) -> list[Activity]:
        """Active activities hosted by a user, oldest first."""
        with logfire.span("activity_service.list_hosted_activities", host_id=host_id):
            return await self.activity_repository.find_active_by_host(host_id)

    async def create_activity(
        self, host_id: UserId, fields: ActivityFields
    ) -> tuple[Activity, Chat]:
        """Create an activity together with its chat.

        If the chat cannot be created the activity is deleted again.

        Args:
            host_id: Creating user, becomes the host
            fields: Title, description, image URL and participant limit

        Returns:
            The activity and its chat, whose only participant is the host

        Raises:
            ValidationError: If a field is invalid
            PartialFailureError: If the chat could not be created
        """
        with logfire.span("activity_service.create_activity", host_id=host_id):
            valid = validate_activity_fields(fields)
            activity = await self.activity_repository.create(
                host_id=host_id,
                title=valid.title,
                description=valid.description,
                image_url=valid.image_url,
                max_participants=valid.max_participants
                or self.activity_settings.default_max_participants,
            )

            try:
                chat = await self.chat_repository.create(activity.id, host_id)
            except Exception as e:
                logfire.error(
                    "Chat creation failed, removing activity",
                    activity_id=activity.id,
                    error=str(e),
                )
                try:
                    await self.activity_repository.delete(activity.id)
                except Exception as cleanup_error:
                    logfire.error(
                        "Activity cleanup failed",
                        activity_id=activity.id,
                        error=str(cleanup_error),
                    )
                    raise PartialFailureError(
                        "create_activity", "delete_activity", str(cleanup_error)
                    ) from cleanup_error
                raise PartialFailureError("create_activity", "create_chat", str(e)) from e

            logfire.info(
                "Activity created",
                activity_id=activity.id,
                host_id=host_id,
                title=activity.title,
            )
            return activity, chat

    async def edit_activity(
        self, activity_id: ActivityId, actor_id: UserId, fields: ActivityFields
    ) -> Activity:
        """Edit title, description and image of an activity.

        Blank optional fields are cleared.

        Raises:
            NotFoundError: If the activity does not exist
            ForbiddenError: If the actor does not host the activity
            ValidationError: If a field is invalid
        """
        with logfire.span(
            "activity_service.edit_activity",
            activity_id=activity_id,
            actor_id=actor_id,
        ):
            activity = await self.get_activity(activity_id)
            if not activity.is_host(actor_id):
                logfire.warn(
                    "Activity edit denied", activity_id=activity_id, actor_id=actor_id
                )
                raise ForbiddenError("edit", "activity", activity_id, actor_id)

            valid = validate_activity_fields(fields)
            updated = await self.activity_repository.update_details(
                activity_id,
                title=valid.title,
                description=valid.description,
                image_url=valid.image_url,
                updated_at=datetime.now(timezone.utc),
            )
            logfire.info("Activity updated", activity_id=activity_id)
            return updated

    async def end_activity(
        self, activity_id: ActivityId, actor_id: UserId
    ) -> CascadeReport:
        """End an activity and delete everything attached to it.

        Steps, in order: mark the activity ended, delete its join requests,
        delete the chat messages, delete the chat, delete the activity.
        Every step treats already-deleted records as done, so running the
        operation again after a failure finishes the job. Once the activity
        itself is gone the operation reports it as already ended and still
        sweeps whatever was left behind; the chat's host is checked instead.

        Args:
            activity_id: Activity to end
            actor_id: Ending user, must host the activity

        Returns:
            What this run deleted

        Raises:
            ForbiddenError: If the actor does not host the activity
            PartialFailureError: If a step after marking the activity
                ended failed; rerun to finish
        """
        with logfire.span(
            "activity_service.end_activity",
            activity_id=activity_id,
            actor_id=actor_id,
        ):
            report = CascadeReport(activity_id=activity_id)

            activity = await self.activity_repository.find_by_id(activity_id)
            if activity:
                host_id = activity.host_id
            else:
                chat = await self.chat_repository.find_by_id(ChatId(activity_id))
                host_id = chat.host_id if chat else None
            if host_id is not None and host_id != actor_id:
                logfire.warn(
                    "Activity end denied", activity_id=activity_id, actor_id=actor_id
                )
                raise ForbiddenError("end", "activity", activity_id, actor_id)

            if activity:
                report.already_ended = not activity.is_active
                await self.activity_repository.mark_ended(
                    activity_id, datetime.now(timezone.utc)
                )
                report.completed_steps.append("mark_ended")
            else:
                logfire.info("Activity already ended", activity_id=activity_id)
                report.already_ended = True

            steps: list[tuple[str, Callable[[CascadeReport], Awaitable[None]]]] = [
                ("delete_join_requests", self._delete_join_requests),
                ("delete_messages", self._delete_messages),
                ("delete_chat", self._delete_chat),
                ("delete_activity", self._delete_activity),
            ]
            for name, step in steps:
                try:
                    await step(report)
                except Exception as e:
                    logfire.error(
                        "End activity step failed",
                        activity_id=activity_id,
                        step=name,
                        completed_steps=report.completed_steps,
                        error=str(e),
                    )
                    raise PartialFailureError("end_activity", name, str(e)) from e
                report.completed_steps.append(name)

            logfire.info(
                "Activity ended",
                activity_id=activity_id,
                join_requests_deleted=report.join_requests_deleted,
                messages_deleted=report.messages_deleted,
            )
            return report

    async def _delete_join_requests(self, report: CascadeReport) -> None:
        requests = await self.join_request_repository.find_by_activity(
            report.activity_id
        )
        for request in requests:
            if await self.join_request_repository.delete(request.id):
                report.join_requests_deleted += 1

    async def _delete_messages(self, report: CascadeReport) -> None:
        messages = await self.message_repository.find_by_chat(
            ChatId(report.activity_id)
        )
        for message in messages:
            if await self.message_repository.delete(message.id):
                report.messages_deleted += 1

    async def _delete_chat(self, report: CascadeReport) -> None:
        report.chat_deleted = await self.chat_repository.delete(
            ChatId(report.activity_id)
        )

    async def _delete_activity(self, report: CascadeReport) -> None:
        report.activity_deleted = await self.activity_repository.delete(
            report.activity_id
        )
