"""Error kinds raised by concepts and mapped to HTTP responses.

Every concept operation raises one of these instead of returning an error
value. The routing layer lets them propagate; ``tandem.main`` turns them
into ``{"detail": message}`` responses with the status code below.
"""
from fastapi import status


class ConceptError(Exception):
    """Base exception for concept errors.

    Attributes:
        message: Human-readable error message
        status_code: HTTP status code the error maps to
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UnauthenticatedError(ConceptError):
    """No logged-in session for the request."""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotAllowedError(ConceptError):
    """Ownership violation or an invalid state transition."""

    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ConceptError):
    """Referenced record does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class BadValuesError(ConceptError):
    """Malformed input, e.g. empty required text or an unknown status."""

    status_code = status.HTTP_400_BAD_REQUEST


class OwnerNotMatchError(NotAllowedError):
    """A user tried to act on a record owned by someone else."""

    def __init__(self, user: str, record_id: str, role: str, entity: str):
        self.user = user
        self.record_id = record_id
        super().__init__(f"{user} is not the {role} of {entity} {record_id}!")


class InvalidStatusError(BadValuesError):
    """A status string outside the entity's declared statuses."""

    def __init__(self, status_value: str, entity: str):
        self.status = status_value
        super().__init__(f"{status_value} is not a valid {entity} status.")
