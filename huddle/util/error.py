"""Utility layer errors."""


class UtilError(Exception):
    """Base utility error."""

    pass


class TokenError(UtilError):
    """Identity token could not be decoded or has expired."""

    pass
