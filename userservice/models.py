"""Domain models for the user directory service."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class User:
    """Represents a user record held in the in-memory store."""

    id: str
    name: str
    email: str
    created_at: datetime


__all__ = ["User"]
