"""Mappers for converting between store documents and domain models.

Documents are JSON-compatible dicts. The store owns ``id`` and
``created_at``; every other field is written by these mappers.
"""

from typing import Any, Dict

from huddle.domain.model import Activity, Chat, JoinRequest, Message, Profile

_STORE_OWNED = {"id", "created_at"}


def document_to_activity(doc: Dict[str, Any]) -> Activity:
    """Convert store document to Activity domain model.

    An activity that was never edited has no updated_at yet and reports its
    creation time.
    """
    return Activity.model_validate(
        {**doc, "updated_at": doc.get("updated_at") or doc["created_at"]}
    )


def document_to_join_request(doc: Dict[str, Any]) -> JoinRequest:
    """Convert store document to JoinRequest domain model."""
    return JoinRequest.model_validate(doc)


def document_to_chat(doc: Dict[str, Any]) -> Chat:
    """Convert store document to Chat domain model.

    Participants are stored as an array and read back as a set.
    """
    return Chat.model_validate({**doc, "participants": doc.get("participants") or []})


def document_to_message(doc: Dict[str, Any]) -> Message:
    """Convert store document to Message domain model."""
    return Message.model_validate(doc)


def document_to_profile(doc: Dict[str, Any]) -> Profile:
    """Convert store document to Profile domain model."""
    return Profile.model_validate(doc)


def profile_to_document(profile: Profile) -> Dict[str, Any]:
    """Convert Profile to a store document.

    ``created_at`` is store-owned and dropped.
    """
    return profile.model_dump(mode="json", exclude=_STORE_OWNED)
