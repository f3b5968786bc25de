"""Forums API endpoints.

Pattern: Sync routes (run in FastAPI's threadpool) + sync domain operations.
Domain exceptions propagate to the global handlers in app/api/error_handlers.py.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, Response, status

from app.api.deps import get_forum_operations, read_id_param
from app.core.config import settings
from app.domain.exceptions import EditConflictError
from app.domain.forum_operations import (
    ForumOperations,
    apply_update,
    ensure_valid,
    forum_from_input,
)
from app.models.database.forums import ForumEnvelope, ForumInput, ForumRead, ForumUpdate


router = APIRouter(prefix="/forums", tags=["forums"])


@router.post(
    "",
    response_model=ForumEnvelope,
    status_code=status.HTTP_201_CREATED,
    summary="Create forum"
)
def create_forum(
    data: ForumInput,
    response: Response,
    ops: ForumOperations = Depends(get_forum_operations)
) -> ForumEnvelope:
    """
    Create a forum listing.

    Every field is required; all rule violations are reported together
    (400 with a field -> message map). On success the Location header
    points at the new resource.
    """
    forum = forum_from_input(data)
    ensure_valid(forum)
    ops.insert(forum)

    response.headers["Location"] = f"{settings.API_PREFIX}/forums/{forum.id}"
    return ForumEnvelope(forum=ForumRead.model_validate(forum))


@router.get(
    "/{forum_id}",
    response_model=ForumEnvelope,
    summary="Get forum by ID"
)
def show_forum(
    forum_id: int = Depends(read_id_param),
    ops: ForumOperations = Depends(get_forum_operations)
) -> ForumEnvelope:
    """Get a forum by ID. Malformed or unknown IDs return 404."""
    forum = ops.get(forum_id)
    return ForumEnvelope(forum=ForumRead.model_validate(forum))


@router.patch(
    "/{forum_id}",
    response_model=ForumEnvelope,
    summary="Update forum"
)
def update_forum(
    data: ForumUpdate,
    forum_id: int = Depends(read_id_param),
    expected_version: Optional[int] = Header(
        None,
        alias="X-Expected-Version",
        description="Reject the update (409) unless the stored version matches"
    ),
    ops: ForumOperations = Depends(get_forum_operations)
) -> ForumEnvelope:
    """
    Partial update. Omitted fields keep their stored values; the merged
    record is re-validated and its version bumped by one.
    """
    forum = ops.get(forum_id)
    if expected_version is not None and expected_version != forum.version:
        raise EditConflictError("Forum", forum_id, expected_version)

    apply_update(forum, data)
    ensure_valid(forum)
    ops.update(forum)

    return ForumEnvelope(forum=ForumRead.model_validate(forum))


@router.delete(
    "/{forum_id}",
    response_model=dict,
    summary="Delete forum"
)
def delete_forum(
    forum_id: int = Depends(read_id_param),
    ops: ForumOperations = Depends(get_forum_operations)
) -> dict:
    """Hard-delete a forum. 404 if it does not exist."""
    ops.delete(forum_id)
    return {"message": "forum successfully deleted"}
