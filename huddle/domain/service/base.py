"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the rules that span several records: the join
    request state machine, chat access and the activity lifecycle.
    """

    pass
