"""Domain-level exceptions.

Every failure the form can run into is expressed as a subclass of
DomainException so the controller can catch them uniformly and turn them
into user-facing notifications.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """User input was rejected before reaching the remote store."""


class EntityNotFoundError(DomainException):
    """A requested record does not exist in the remote store."""


class RemoteServiceError(DomainException):
    """The remote store could not be reached or answered with an error."""
