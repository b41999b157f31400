"""Custom exceptions for Projexia."""


class ProjexiaError(Exception):
    """Base exception for all Projexia errors."""


class NotFoundError(ProjexiaError):
    """Raised when a company, user, project or other record does not exist."""


class PermissionDeniedError(ProjexiaError):
    """Raised when the acting user's roles do not allow an operation."""


class NotSignedInError(ProjexiaError):
    """Raised when a command needs an active user and none is configured."""


class StoreError(ProjexiaError):
    """Raised when the document store cannot be read or written."""


class ConflictError(StoreError):
    """Raised when a project document changed between read and write."""


class ImpactGenerationError(ProjexiaError):
    """Raised when impact indicators cannot be generated by the language model."""
