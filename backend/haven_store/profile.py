from __future__ import annotations

from typing import Any

from .time_utils import to_iso, utc_now
from .user_store import UserStore


class ProfileAggregator:
    def __init__(self, users: UserStore) -> None:
        self._users = users

    def get_profile(self, user_id: str) -> dict[str, Any]:
        user = self._users.get_by_id(user_id)
        if user is None:
            raise LookupError(f"No user with id {user_id}")
        contacts = user.contacts_document()
        return {
            "userId": user.id,
            "name": user.name,
            "email": user.email,
            "emergencyContacts": contacts,
            "contactCount": len(contacts),
            "hasEmergencyContacts": bool(contacts),
            "profile": dict(user.extra),
            "createdAt": user.created_at,
            "generatedAt": to_iso(utc_now()),
        }
