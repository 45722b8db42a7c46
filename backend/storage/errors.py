# backend/storage/errors.py
# Failures surfaced by the storage layer. A missing row is not an error:
# lookups return None for that.


class StorageError(Exception):
    """Base class for storage failures."""


class ConstraintViolation(StorageError):
    """A unique or foreign-key constraint rejected an insert or update."""


class ConnectivityFailure(StorageError):
    """The database could not be reached or a statement timed out."""


class InsufficientStock(StorageError):
    """A conditional stock reservation found fewer units than requested."""

    def __init__(self, product_id: int, requested: int):
        self.product_id = product_id
        self.requested = requested
        super().__init__(f"Insufficient stock for product {product_id} (requested {requested})")
