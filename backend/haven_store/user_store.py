from __future__ import annotations

from typing import Any, Mapping

from haven_core.models import EmergencyContact, User, apply_user_updates, canonical_id, new_id

from .database import SQLiteDocumentDB
from .time_utils import to_iso, utc_now


class UserStore:
    """Create, read and update user documents.

    Emergency contacts live inside the user document; every contact change is a
    write of the whole document.
    """

    def __init__(self, db: SQLiteDocumentDB) -> None:
        self._db = db

    def create(self, *, name: str, email: str) -> User:
        now = to_iso(utc_now())
        user = User(id=new_id(), name=name, email=email, created_at=now, updated_at=now)
        self._db.insert(user.id, user.email, user.stored_document(), timestamp=now)
        return user

    def get_by_id(self, user_id: Any) -> User | None:
        found = self._db.read(doc_id=canonical_id(user_id))
        return User.from_document(*found) if found else None

    def get_by_email(self, email: str) -> User | None:
        found = self._db.read(email=email)
        return User.from_document(*found) if found else None

    def update(self, user_id: Any, fields: Mapping[str, Any]) -> User | None:
        current = self.get_by_id(user_id)
        if current is None:
            return None
        updated = apply_user_updates(current, fields)
        updated.updated_at = to_iso(utc_now())
        if not self._db.write(updated.id, updated.email, updated.stored_document(), timestamp=updated.updated_at):
            return None
        return updated

    def add_emergency_contact(
        self,
        user_id: Any,
        *,
        name: str,
        phone: str,
        relationship: str | None = None,
    ) -> User | None:
        user = self.get_by_id(user_id)
        if user is None:
            return None
        contact = EmergencyContact(id=new_id(), name=name, phone=phone, relationship=relationship)
        return self.update(user.id, {"emergencyContacts": [*user.emergency_contacts, contact]})
