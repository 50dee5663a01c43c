"""In-memory storage for user records."""

from __future__ import annotations

from typing import Dict, List, Optional

from .models import User


class UserStore:
    """Process-lifetime mapping from user id to :class:`User`.

    Dictionaries preserve insertion order, so :meth:`get_all` returns records in
    the order they were created. Uniqueness of ids is the caller's concern.
    """

    def __init__(self) -> None:
        self._users: Dict[str, User] = {}

    def __len__(self) -> int:
        return len(self._users)

    def insert(self, user: User) -> None:
        self._users[user.id] = user

    def get_by_id(self, user_id: str) -> Optional[User]:
        return self._users.get(user_id)

    def find_by_email(self, email: str) -> Optional[User]:
        # Stored addresses are already lowercased; callers normalise first.
        for user in self._users.values():
            if user.email == email:
                return user
        return None

    def get_all(self) -> List[User]:
        return list(self._users.values())


__all__ = ["UserStore"]
