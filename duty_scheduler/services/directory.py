# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""
Service: Team directory — member lookup and access-key authentication.
"""

import hmac
from typing import Optional

from duty_scheduler.core.logging import get_logger
from duty_scheduler.models.domain import TeamMember

logger = get_logger(__name__)

DEFAULT_MEMBERS: list[dict] = [
    {"name": "Shrishti", "priority": 1, "color": "purple"},
    {"name": "Aakash", "priority": 2, "color": "blue"},
    {"name": "Ashish", "priority": 3, "color": "green"},
    {"name": "Sahil", "priority": 4, "color": "yellow"},
]


class TeamDirectory:
    """Read-only view over the team, ordered by priority."""

    def __init__(self, team_repo) -> None:
        self._members = team_repo

    # ── Queries ──

    def list_members(self) -> list[TeamMember]:
        return sorted(self._members.get_all(), key=lambda m: m.priority)

    def find_by_name(self, name: str) -> Optional[TeamMember]:
        return self._members.get_by_name(name)

    def find_by_access_key(self, access_key: Optional[str]) -> Optional[TeamMember]:
        """Exact-match lookup; an empty key never matches."""
        if not access_key:
            return None
        presented = access_key.encode("utf-8")
        for member in self._members.get_all():
            if hmac.compare_digest(member.access_key.encode("utf-8"), presented):
                return member
        return None

    def validate_access_key(self, access_key: Optional[str]) -> Optional[TeamMember]:
        return self.find_by_access_key(access_key)

    def priority_map(self) -> dict[str, int]:
        return {m.name: m.priority for m in self._members.get_all()}

    # ── Seed ──

    def seed_defaults(self, access_keys: Optional[dict[str, str]] = None) -> None:
        """Create the default team so the service is usable immediately."""
        if self._members.count() > 0:
            return
        access_keys = access_keys or {}
        for spec in DEFAULT_MEMBERS:
            self._members.create(
                name=spec["name"],
                priority=spec["priority"],
                color=spec["color"],
                access_key=access_keys.get(
                    spec["name"], f"{spec['name'].upper()}_2025_SECURE"
                ),
            )
        logger.info("Seeded %d default team members", len(DEFAULT_MEMBERS))
