"""Main API router aggregation."""

from fastapi import APIRouter

from app.api.routes import forums, health

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(forums.router, tags=["forums"])
