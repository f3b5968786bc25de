"""Domain operations for Forums - validation rules and persistence.

ForumOperations receives its store at construction; nothing here touches a
global connection. Store results are turned into domain exceptions, which
the API layer maps to HTTP responses.

Pattern: Sync operations (forum routes are sync, FastAPI runs them in its threadpool).
"""

import logging
from typing import Any, Dict

from app.domain.exceptions import (
    DomainValidationError,
    EditConflictError,
    EntityNotFoundError,
    StoreError,
)
from app.domain.forum_store import ForumStore, StoreResult, StoreStatus
from app.domain.validator import (
    PHONE_RX,
    Validator,
    byte_length,
    matches,
    unique,
    valid_email,
    valid_website,
)
from app.models.database.forums import Forum, ForumInput, ForumUpdate

logger = logging.getLogger(__name__)

MAX_TEXT_BYTES = 200
MAX_ADDRESS_BYTES = 500
MIN_MODE_ENTRIES = 1
MAX_MODE_ENTRIES = 5


def validate_forum(v: Validator, forum: Forum) -> None:
    """Run every field rule against forum, recording failures on v. No short-circuit."""
    for key in ("name", "level", "contact"):
        value = getattr(forum, key) or ""
        v.check(value != "", key, "must be provided")
        v.check(byte_length(value) <= MAX_TEXT_BYTES, key, f"must not be more than {MAX_TEXT_BYTES} bytes long")

    phone = forum.phone or ""
    v.check(phone != "", "phone", "must be provided")
    v.check(matches(phone, PHONE_RX), "phone", "must be a valid phone number")

    email = forum.email or ""
    v.check(email != "", "email", "must be provided")
    v.check(valid_email(email), "email", "must be a valid email address")

    website = forum.website or ""
    v.check(website != "", "website", "must be provided")
    v.check(valid_website(website), "website", "must be a valid URL")

    address = forum.address or ""
    v.check(address != "", "address", "must be provided")
    v.check(byte_length(address) <= MAX_ADDRESS_BYTES, "address", f"must not be more than {MAX_ADDRESS_BYTES} bytes long")

    mode = forum.mode
    v.check(mode is not None, "mode", "must be provided")
    mode = mode or []
    v.check(len(mode) >= MIN_MODE_ENTRIES, "mode", f"must contain at least {MIN_MODE_ENTRIES} entry")
    v.check(len(mode) <= MAX_MODE_ENTRIES, "mode", f"must contain at most {MAX_MODE_ENTRIES} entries")
    v.check(unique(mode), "mode", "must not contain duplicate entries")


def ensure_valid(forum: Forum) -> None:
    """Raise DomainValidationError carrying every failing field."""
    v = Validator()
    validate_forum(v, forum)
    if not v.valid():
        raise DomainValidationError(v.errors)


def forum_from_input(data: ForumInput) -> Forum:
    """Build an unsaved entity from the create payload (id/created_at/version left unset)."""
    return Forum(
        name=data.name or "",
        level=data.level or "",
        contact=data.contact or "",
        phone=data.phone or "",
        email=data.email or "",
        website=data.website or "",
        address=data.address or "",
        mode=data.mode,
    )


def apply_update(forum: Forum, data: ForumUpdate) -> Forum:
    """Copy supplied (non-null) fields of a partial update onto forum."""
    for key, value in data.model_dump(exclude_unset=True, exclude_none=True).items():
        setattr(forum, key, value)
    return forum


class ForumOperations:
    """
    Forum persistence. Instance methods over an injected ForumStore.

    CRITICAL: All methods are SYNC (no async/await).
    """

    def __init__(self, store: ForumStore):
        self.store = store

    @staticmethod
    def _raise_for(result: StoreResult, operation: str, forum_id: Any = None, version: Any = None) -> None:
        if result.status is StoreStatus.OK:
            return
        if result.status is StoreStatus.NOT_FOUND:
            raise EntityNotFoundError("Forum", forum_id)
        if result.status is StoreStatus.CONFLICT:
            raise EditConflictError("Forum", forum_id, version)
        raise StoreError(operation, result.detail)

    def insert(self, forum: Forum) -> Forum:
        """
        Create forum row. Writes the database-assigned id, created_at and
        version back onto the same instance.
        """
        result = self.store.insert(forum.writable_values())
        self._raise_for(result, "insert forum")

        row: Dict[str, Any] = result.row or {}
        forum.id = row["id"]
        forum.created_at = row["created_at"]
        forum.version = row["version"]

        logger.info(f"Forum {forum.id} created")
        return forum

    def get(self, forum_id: int) -> Forum:
        """Fetch forum by ID. IDs below 1 are rejected without a store call."""
        if forum_id < 1:
            raise EntityNotFoundError("Forum", forum_id)

        result = self.store.fetch(forum_id)
        self._raise_for(result, "get forum", forum_id)
        return Forum(**(result.row or {}))

    def update(self, forum: Forum) -> Forum:
        """
        Persist client fields and bump version by exactly 1.

        The write only applies if the stored version still equals
        forum.version; the new version is written back onto forum.

        Raises:
            EntityNotFoundError: no row with forum.id
            EditConflictError: row exists with a different version
        """
        if forum.id is None or forum.id < 1:
            raise EntityNotFoundError("Forum", forum.id)

        result = self.store.update(forum.id, forum.version, forum.writable_values())
        self._raise_for(result, "update forum", forum.id, forum.version)

        forum.version = (result.row or {})["version"]
        logger.info(f"Forum {forum.id} updated to version {forum.version}")
        return forum

    def delete(self, forum_id: int) -> None:
        """Delete forum by ID. Raises EntityNotFoundError when no row was removed."""
        if forum_id < 1:
            raise EntityNotFoundError("Forum", forum_id)

        result = self.store.delete(forum_id)
        self._raise_for(result, "delete forum", forum_id)
        logger.info(f"Forum {forum_id} deleted")

    def ping(self) -> bool:
        """True if the store answers a trivial query."""
        return self.store.ping().is_ok
