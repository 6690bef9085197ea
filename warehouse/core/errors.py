"""
Inventory domain errors.

Raised by the rules and services layers before any mutation is attempted.
Each error carries the HTTP status the API layer should answer with.
"""


class InventoryError(Exception):
    """Base exception for all inventory domain errors"""

    status_code = 400

    def __init__(self, message=None):
        super().__init__(message or self.__class__.__doc__)
        self.message = message or self.__class__.__doc__

    @property
    def kind(self):
        return self.__class__.__name__


class InvalidVolume(InventoryError):
    """Volume must be between 1 and the volume available at the source entry"""

    status_code = 400


class MissingStore(InventoryError):
    """A store is required for Full exits"""

    status_code = 400


class LocationOccupied(InventoryError):
    """The location still holds stock"""

    status_code = 409


class DuplicateSku(InventoryError):
    """A product with this SKU already exists"""

    status_code = 409


class NotFound(InventoryError):
    """The requested record does not exist"""

    status_code = 404


class ValidationError(InventoryError):
    """A required field is blank or out of range"""

    status_code = 422


class CollaboratorUnavailable(InventoryError):
    """The storage backend could not complete the operation"""

    status_code = 503


__all__ = [
    "CollaboratorUnavailable",
    "DuplicateSku",
    "InvalidVolume",
    "InventoryError",
    "LocationOccupied",
    "MissingStore",
    "NotFound",
    "ValidationError",
]
