"""Database models - import all models to ensure proper registration."""

from app.models.database.forums import Forum

__all__ = [
    "Forum",
]
