"""SQL boundary for the forums table.

Every call returns a StoreResult instead of raising, so callers branch on an
explicit status (ok / not found / conflict / error) rather than inspecting
driver exceptions. A connection is taken from the pool per call and returned
on every exit path.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Optional, Protocol

from sqlalchemy import delete, insert, select, text, update
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from app.models.database.forums import Forum


forums_table = Forum.__table__


class StoreStatus(str, Enum):
    OK = "ok"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    ERROR = "error"


@dataclass(frozen=True)
class StoreResult:
    """Outcome of one store call. `row` is set for successful reads/writes."""
    status: StoreStatus
    row: Optional[Dict[str, Any]] = None
    detail: str = ""

    @property
    def is_ok(self) -> bool:
        return self.status is StoreStatus.OK

    @classmethod
    def success(cls, row: Optional[Dict[str, Any]] = None) -> "StoreResult":
        return cls(StoreStatus.OK, row=row)

    @classmethod
    def not_found(cls) -> "StoreResult":
        return cls(StoreStatus.NOT_FOUND)

    @classmethod
    def conflict(cls) -> "StoreResult":
        return cls(StoreStatus.CONFLICT)

    @classmethod
    def error(cls, detail: str) -> "StoreResult":
        return cls(StoreStatus.ERROR, detail=detail)


class ForumStore(Protocol):
    """What ForumOperations needs from persistence."""

    def insert(self, values: Dict[str, Any]) -> StoreResult: ...

    def fetch(self, forum_id: int) -> StoreResult: ...

    def update(self, forum_id: int, expected_version: int, values: Dict[str, Any]) -> StoreResult: ...

    def delete(self, forum_id: int) -> StoreResult: ...

    def ping(self) -> StoreResult: ...


class SQLForumStore:
    """ForumStore backed by a SQLAlchemy engine (PostgreSQL in production)."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def _run(self, work: Callable[[Connection], StoreResult]) -> StoreResult:
        # One transaction per call: commit on return, rollback on error
        try:
            with self.engine.begin() as conn:
                return work(conn)
        except SQLAlchemyError as e:
            return StoreResult.error(f"{type(e).__name__}: {e}")

    def insert(self, values: Dict[str, Any]) -> StoreResult:
        """INSERT ... RETURNING id, created_at, version."""
        stmt = (
            insert(forums_table)
            .values(**values)
            .returning(forums_table.c.id, forums_table.c.created_at, forums_table.c.version)
        )

        def work(conn: Connection) -> StoreResult:
            row = conn.execute(stmt).mappings().one()
            return StoreResult.success(dict(row))

        return self._run(work)

    def fetch(self, forum_id: int) -> StoreResult:
        stmt = select(forums_table).where(forums_table.c.id == forum_id)

        def work(conn: Connection) -> StoreResult:
            row = conn.execute(stmt).mappings().one_or_none()
            if row is None:
                return StoreResult.not_found()
            return StoreResult.success(dict(row))

        return self._run(work)

    def update(self, forum_id: int, expected_version: int, values: Dict[str, Any]) -> StoreResult:
        """
        Overwrite client fields and bump version in a single statement.

        Guarded by the expected version; when nothing matched, a follow-up
        lookup tells a missing row apart from a concurrent edit.
        """
        stmt = (
            update(forums_table)
            .where(
                forums_table.c.id == forum_id,
                forums_table.c.version == expected_version,
            )
            .values(**values, version=forums_table.c.version + 1)
            .returning(forums_table.c.version)
        )

        def work(conn: Connection) -> StoreResult:
            row = conn.execute(stmt).mappings().one_or_none()
            if row is not None:
                return StoreResult.success(dict(row))

            exists = conn.execute(
                select(forums_table.c.id).where(forums_table.c.id == forum_id)
            ).first()
            return StoreResult.conflict() if exists else StoreResult.not_found()

        return self._run(work)

    def delete(self, forum_id: int) -> StoreResult:
        stmt = delete(forums_table).where(forums_table.c.id == forum_id)

        def work(conn: Connection) -> StoreResult:
            result = conn.execute(stmt)
            if result.rowcount == 0:
                return StoreResult.not_found()
            return StoreResult.success()

        return self._run(work)

    def ping(self) -> StoreResult:
        def work(conn: Connection) -> StoreResult:
            conn.execute(text("SELECT 1"))
            return StoreResult.success()

        return self._run(work)
