"""API dependencies: store/operations wiring and path-parameter parsing."""

import re

from fastapi import Depends, Path
from sqlalchemy.engine import Engine

from app.core.database import get_engine
from app.domain.exceptions import EntityNotFoundError
from app.domain.forum_operations import ForumOperations
from app.domain.forum_store import ForumStore, SQLForumStore


MAX_ID = 2**63 - 1  # bigint identity
_ID_RX = re.compile(r"[+-]?[0-9]+")


def get_forum_store(engine: Engine = Depends(get_engine)) -> ForumStore:
    """SQL-backed store over the shared pooled engine."""
    return SQLForumStore(engine)


def get_forum_operations(store: ForumStore = Depends(get_forum_store)) -> ForumOperations:
    return ForumOperations(store)


def read_id_param(forum_id: str = Path(..., description="Forum ID (positive integer)")) -> int:
    """
    Parse the {forum_id} path segment.

    Anything that is not a base-10 integer in 1..2^63-1 is reported as
    not found rather than as a validation error.
    """
    if not _ID_RX.fullmatch(forum_id):
        raise EntityNotFoundError("Forum", forum_id)

    value = int(forum_id)
    if value < 1 or value > MAX_ID:
        raise EntityNotFoundError("Forum", forum_id)
    return value
