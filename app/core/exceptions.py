"""
Domain exceptions raised by the service layer.

Routes never build HTTP errors for these by hand; app.main registers one
exception handler per class.
"""


class CitizenConnectError(Exception):
    """Base class for all service-level failures."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class StatusPermissionError(CitizenConnectError, PermissionError):
    """
    Operation not allowed for the caller or for the report's current status.

    Raised when a citizen edits/deletes a report outside the editable states,
    touches a report they do not own, or calls an admin-only operation.
    """


class FieldValidationError(CitizenConnectError, ValueError):
    """A required field is missing or empty after trimming."""

    def __init__(self, message: str, field: str = None):
        super().__init__(message)
        self.field = field


class NotFoundError(CitizenConnectError, LookupError):
    """Document does not exist in the store."""

    def __init__(self, collection: str, document_id: str):
        super().__init__(f"{collection}/{document_id} not found")
        self.collection = collection
        self.document_id = document_id


class AccountError(CitizenConnectError):
    """The auth provider refused an account operation."""
