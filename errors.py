"""
Domain errors raised by the service layer.

The API layer maps each class to an HTTP status in ``main.py``; services
never build HTTP responses themselves.
"""


class RecordStoreError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(RecordStoreError):
    """A user, product, order or wishlist lookup matched nothing."""
    status_code = 404


class ValidationError(RecordStoreError):
    """Input is well-formed but breaks a business rule."""
    status_code = 400


class ConflictError(RecordStoreError):
    """The operation clashes with existing data (references, uniqueness)."""
    status_code = 409


class AuthError(RecordStoreError):
    status_code = 401
