"""Strongly typed identifiers for Huddle domain entities.

Identifiers are opaque strings assigned by the entity store (or by the
identity provider for users). NewType keeps the different kinds apart.
"""

from typing import NewType

# Core domain entity identifiers
UserId = NewType("UserId", str)
ActivityId = NewType("ActivityId", str)
JoinRequestId = NewType("JoinRequestId", str)
ChatId = NewType("ChatId", str)  # Always equal to the owning ActivityId
MessageId = NewType("MessageId", str)
