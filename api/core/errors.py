"""
Store error taxonomy.

Repositories translate asyncpg failures into these so services can map them to
HTTP statuses without knowing about the driver.
"""

from __future__ import annotations


class StoreError(RuntimeError):
    pass


class NotFoundError(StoreError):
    pass


# Foreign key points at a row that does not exist.
class ReferenceViolationError(StoreError):
    pass


class ConflictError(StoreError):
    pass
