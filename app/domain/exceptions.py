"""Domain-layer exceptions.

These keep the domain layer free of HTTP awareness. Global exception
handlers in app/api/error_handlers.py map them to HTTP status codes.
"""

from typing import Dict


class EntityNotFoundError(Exception):
    """Entity not found (or malformed identifier). Maps to HTTP 404."""

    def __init__(self, entity: str, entity_id=None):
        self.entity = entity
        self.entity_id = entity_id
        msg = f"{entity} {entity_id} not found" if entity_id is not None else f"{entity} not found"
        super().__init__(msg)


class EditConflictError(Exception):
    """Row changed since it was read (version mismatch). Maps to HTTP 409."""

    def __init__(self, entity: str, entity_id=None, expected_version=None):
        self.entity = entity
        self.entity_id = entity_id
        self.expected_version = expected_version
        super().__init__(f"{entity} {entity_id} was modified (expected version {expected_version})")


class DomainValidationError(Exception):
    """Field rule violations. Maps to HTTP 400 with the field -> message map."""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__(", ".join(f"{key}: {msg}" for key, msg in self.errors.items()))


class StoreError(Exception):
    """Persistence failure not classified above. Maps to HTTP 500; detail is logged only."""

    def __init__(self, operation: str, detail: str = ""):
        self.operation = operation
        self.detail = detail
        msg = f"{operation} failed: {detail}" if detail else f"{operation} failed"
        super().__init__(msg)
