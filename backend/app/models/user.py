"""
user.py — Caller Identity & Public Profile

Purpose:
- `AuthenticatedUser`: the identity resolved from a bearer token. Users are
  owned by the identity provider (Supabase Auth); this backend never stores
  credentials.
- `Profile`: display data from the `profiles` table.

Used by:
- security.py (token resolution)
- services/* (explicit caller identity on every mutating operation)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class AuthenticatedUser:
    id: str
    email: Optional[str] = None

    @property
    def display_name(self) -> str:
        if self.email and "@" in self.email:
            return self.email.split("@")[0]
        return "Skater"


@dataclass
class Profile:
    id: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    is_fallback: bool = False

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Profile":
        return cls(
            id=str(row["id"]),
            full_name=row.get("full_name"),
            avatar_url=row.get("avatar_url"),
            bio=row.get("bio"),
        )

    @classmethod
    def fallback_for(cls, user: AuthenticatedUser) -> "Profile":
        """Placeholder used when the user has not created a profile row yet."""
        return cls(id=user.id, full_name=user.display_name, bio="", is_fallback=True)
