from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from app.api.deps import get_forum_operations
from app.core.config import settings
from app.domain.forum_operations import ForumOperations

router = APIRouter()


@router.get("/healthcheck")
async def healthcheck():
    """
    Liveness probe.

    Returns:
        dict: Availability plus environment and version
    """
    return {
        "status": "available",
        "system_info": {
            "environment": settings.ENVIRONMENT,
            "version": settings.VERSION,
        },
    }


@router.get("/health")
def health_check(ops: ForumOperations = Depends(get_forum_operations)):
    """
    Full health check endpoint.

    Verifies both application status and database connectivity.

    Returns:
        dict: Health status with timestamp and database connectivity check
    """
    db_status = "connected" if ops.ping() else "unreachable"

    return {
        "status": "healthy" if db_status == "connected" else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "checks": {
            "database": db_status
        }
    }
