"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """A field constraint was violated (empty or oversized text, bad image)."""

    pass


class ForbiddenError(DomainError):
    """Raised when an actor lacks the role an operation requires."""

    def __init__(self, action: str, resource: str, resource_id: str, user_id: str):
        self.action = action
        self.resource = resource
        self.resource_id = resource_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} is not allowed to {action} {resource} {resource_id}"
        )


class InvalidTransitionError(DomainError):
    """Raised when a state precondition does not hold.

    Covers terminal join requests, ended activities and lost update races
    detected by a conditional write.
    """

    def __init__(self, message: str):
        super().__init__(message)


class DuplicateRequestError(DomainError):
    """Raised when a join request already exists for an activity/user pair."""

    def __init__(self, activity_id: str, user_id: str):
        self.activity_id = activity_id
        self.user_id = user_id
        super().__init__(
            f"User {user_id} already requested to join activity {activity_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class PartialFailureError(DomainError):
    """Raised when a multi-record operation committed only some of its steps."""

    def __init__(self, operation: str, step: str, message: str):
        self.operation = operation
        self.step = step
        super().__init__(f"{operation} failed at step '{step}': {message}")


class UnauthenticatedError(DomainError):
    """Raised when no authenticated identity is available."""

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)
