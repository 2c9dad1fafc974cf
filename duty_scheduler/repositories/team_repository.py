# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Repository: Team member data access.
Members are keyed by their unique name. NO business rules here — pure CRUD.
"""

import threading
from typing import Optional

from sqlalchemy import func, insert, select

from duty_scheduler.core.database import TransactionScope, team_members
from duty_scheduler.models.domain import TeamMember


class TeamRepository:
    """In-memory team member storage."""

    def __init__(self) -> None:
        self._store: dict[str, TeamMember] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    # ── Read ──

    def get_all(self) -> list[TeamMember]:
        with self._lock:
            members = list(self._store.values())
        return [m.model_copy() for m in members]

    def get_by_name(self, name: str) -> Optional[TeamMember]:
        member = self._store.get(name)
        return member.model_copy() if member else None

    def count(self) -> int:
        return len(self._store)

    # ── Write ──

    def create(
        self,
        name: str,
        priority: int,
        color: str,
        access_key: str,
        is_active: bool = True,
    ) -> TeamMember:
        with self._lock:
            member = TeamMember(
                id=self._next_id,
                name=name,
                priority=priority,
                color=color,
                is_active=is_active,
                access_key=access_key,
            )
            self._next_id += 1
            self._store[name] = member
        return member.model_copy()

    # ── Bulk / internal ──

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
            self._next_id = 1


def _row_to_member(row) -> TeamMember:
    return TeamMember(
        id=row.id,
        name=row.name,
        priority=row.priority,
        color=row.color,
        is_active=bool(row.is_active),
        access_key=row.access_key,
    )


class SqlTeamRepository:
    """Team member storage backed by the ``team_members`` table."""

    def __init__(self, db: TransactionScope) -> None:
        self._db = db

    def get_all(self) -> list[TeamMember]:
        with self._db.connect() as conn:
            rows = conn.execute(select(team_members).order_by(team_members.c.id))
            return [_row_to_member(r) for r in rows]

    def get_by_name(self, name: str) -> Optional[TeamMember]:
        with self._db.connect() as conn:
            row = conn.execute(
                select(team_members).where(team_members.c.name == name)
            ).first()
        return _row_to_member(row) if row else None

    def count(self) -> int:
        with self._db.connect() as conn:
            return conn.execute(select(func.count()).select_from(team_members)).scalar_one()

    def create(
        self,
        name: str,
        priority: int,
        color: str,
        access_key: str,
        is_active: bool = True,
    ) -> TeamMember:
        with self._db.begin() as conn:
            result = conn.execute(
                insert(team_members).values(
                    name=name,
                    priority=priority,
                    color=color,
                    is_active=is_active,
                    access_key=access_key,
                )
            )
            member_id = result.inserted_primary_key[0]
        return TeamMember(
            id=member_id,
            name=name,
            priority=priority,
            color=color,
            is_active=is_active,
            access_key=access_key,
        )

    def clear(self) -> None:
        with self._db.begin() as conn:
            conn.execute(team_members.delete())
