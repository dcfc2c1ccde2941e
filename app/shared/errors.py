from fastapi import status


class DomainError(Exception):
    """Base error raised by the entity services."""

    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class BadRequest(DomainError):
    """Malformed or invalid field, e.g. a bad URL or mismatched batch lengths."""


class NotFound(DomainError):
    """A referenced entity does not exist."""


class Conflict(DomainError):
    """A business rule was violated: duplicate name, frozen metadata, non-empty collection..."""


class ServerError(DomainError):
    """Unexpected failure of the underlying store."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
