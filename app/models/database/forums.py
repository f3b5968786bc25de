"""Forum model - a directory listing (name, contacts, operating mode, address)."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, model_serializer
from sqlalchemy import JSON, BigInteger, DateTime, Integer, Text, func, text
from sqlalchemy.dialects.postgresql import ARRAY
from sqlmodel import Column, Field, SQLModel


# text[] on PostgreSQL; JSON on SQLite (test engine)
MODE_COLUMN_TYPE = ARRAY(Text()).with_variant(JSON(), "sqlite")

# Columns a client may write (insert and update), in statement order
WRITABLE_FIELDS = ("name", "level", "contact", "phone", "email", "website", "address", "mode")


class ForumBase(SQLModel):
    """Shared client-supplied fields for Forum model."""
    name: str = Field(default="", sa_type=Text, description="Forum name")
    level: str = Field(default="", sa_type=Text, description="Education level served")
    contact: str = Field(default="", sa_type=Text, description="Contact person")
    phone: str = Field(default="", sa_type=Text, description="Contact phone number")
    email: str = Field(default="", sa_type=Text, description="Contact email address")
    website: str = Field(default="", sa_type=Text, description="Forum website URL")
    address: str = Field(default="", sa_type=Text, description="Street address")


class Forum(ForumBase, table=True):
    """Forum entity. id, created_at and version are assigned by the database."""
    __tablename__ = "forums"

    id: Optional[int] = Field(
        default=None,
        sa_column=Column(BigInteger().with_variant(Integer(), "sqlite"), primary_key=True),
    )
    created_at: Optional[datetime] = Field(
        default=None,
        sa_column=Column(DateTime(timezone=True), nullable=False, server_default=func.now()),
    )
    mode: Optional[List[str]] = Field(
        default=None,
        sa_column=Column(MODE_COLUMN_TYPE, nullable=False),
        description="Delivery modes (1-5 unique entries)",
    )
    version: int = Field(default=1, sa_column_kwargs={"server_default": text("1")})

    def writable_values(self) -> dict[str, Any]:
        """Client-writable column values, ready for an INSERT/UPDATE."""
        return {key: getattr(self, key) for key in WRITABLE_FIELDS}


class ForumInput(BaseModel):
    """Request body for creating a Forum. Unknown keys are rejected; null reads as empty."""
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    level: Optional[str] = None
    contact: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    address: Optional[str] = None
    mode: Optional[List[str]] = None


class ForumUpdate(BaseModel):
    """Partial update body. Omitted (or null) fields keep their stored value."""
    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = None
    level: Optional[str] = None
    contact: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    address: Optional[str] = None
    mode: Optional[List[str]] = None


class ForumRead(SQLModel):
    """Client-facing representation. created_at is never exposed."""
    id: int
    name: str
    level: str
    contact: str
    phone: str
    email: str = ""
    website: str = ""
    address: str
    mode: List[str]
    version: int

    @model_serializer(mode="wrap")
    def serialize_model(self, handler) -> dict[str, Any]:
        """Omit email and website when empty."""
        result = handler(self)
        for key in ("email", "website"):
            if not result.get(key):
                result.pop(key, None)
        return result


class ForumEnvelope(SQLModel):
    """{"forum": ...} response wrapper."""
    forum: ForumRead
