from fastapi import status


class ContactAPIError(Exception):
    """Base class for errors reported to API callers as ``{message, error?}``."""

    def __init__(self, message: str, error: str | None = None):
        super().__init__(message)
        self.message = message
        self.error = error

    def to_dict(self) -> dict:
        body = {"message": self.message}
        if self.error is not None:
            body["error"] = self.error
        return body


class ValidationError(ContactAPIError):
    """Malformed id, missing required field or bad email."""


class NotFoundError(ContactAPIError):
    """No contact matches the given id."""


class PersistenceError(ContactAPIError):
    """The database call failed."""


class NotInitializedError(PersistenceError):
    def __init__(self):
        super().__init__("Database not initialized",
                         "Call connect() before using the database")


def status_for(error: ContactAPIError) -> int:
    match error:
        case ValidationError():
            return status.HTTP_400_BAD_REQUEST
        case NotFoundError():
            return status.HTTP_404_NOT_FOUND
        case PersistenceError():
            return status.HTTP_500_INTERNAL_SERVER_ERROR
        case _:
            return status.HTTP_500_INTERNAL_SERVER_ERROR
