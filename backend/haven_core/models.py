from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

CONTACT_MUTABLE_FIELDS = ("name", "phone", "relationship")
USER_IMMUTABLE_FIELDS = {"id", "_id", "createdAt", "updatedAt"}


def new_id() -> str:
    return uuid.uuid4().hex


def canonical_id(value: Any) -> str:
    return "" if value is None else str(value)


@dataclass
class EmergencyContact:
    id: str
    name: str
    phone: str
    relationship: str | None = None

    @classmethod
    def from_document(cls, doc: Mapping[str, Any]) -> "EmergencyContact":
        raw_id = doc.get("id", doc.get("_id"))
        relationship = doc.get("relationship")
        return cls(
            id=canonical_id(raw_id) or new_id(),
            name=str(doc.get("name") or ""),
            phone=str(doc.get("phone") or ""),
            relationship=str(relationship) if relationship is not None else None,
        )

    def to_document(self) -> dict[str, Any]:
        doc: dict[str, Any] = {"id": self.id, "name": self.name, "phone": self.phone}
        if self.relationship is not None:
            doc["relationship"] = self.relationship
        return doc


def merge_contact(contact: EmergencyContact, updates: Mapping[str, Any]) -> EmergencyContact:
    """Overwrite mutable contact fields present in ``updates``.

    Missing or null values keep the existing field; the id never changes.
    """
    changes = {
        name: str(updates[name])
        for name in CONTACT_MUTABLE_FIELDS
        if updates.get(name) is not None
    }
    return replace(contact, **changes)


def coerce_contact(item: EmergencyContact | Mapping[str, Any]) -> EmergencyContact:
    if isinstance(item, EmergencyContact):
        return item
    return EmergencyContact.from_document(item)


@dataclass
class User:
    id: str
    name: str
    email: str
    emergency_contacts: list[EmergencyContact] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)
    created_at: str | None = None
    updated_at: str | None = None

    @classmethod
    def from_document(cls, user_id: str, doc: Mapping[str, Any]) -> "User":
        known = {"name", "email", "emergencyContacts"} | USER_IMMUTABLE_FIELDS
        return cls(
            id=canonical_id(user_id),
            name=str(doc.get("name") or ""),
            email=str(doc.get("email") or ""),
            emergency_contacts=[coerce_contact(item) for item in doc.get("emergencyContacts") or []],
            extra={key: value for key, value in doc.items() if key not in known},
            created_at=doc.get("createdAt"),
            updated_at=doc.get("updatedAt"),
        )

    def stored_document(self) -> dict[str, Any]:
        return {
            **self.extra,
            "name": self.name,
            "email": self.email,
            "emergencyContacts": [contact.to_document() for contact in self.emergency_contacts],
            "createdAt": self.created_at,
            "updatedAt": self.updated_at,
        }

    def to_document(self) -> dict[str, Any]:
        return {"id": self.id, **self.stored_document()}

    def contacts_document(self) -> list[dict[str, Any]]:
        return [contact.to_document() for contact in self.emergency_contacts]


def apply_user_updates(user: User, updates: Mapping[str, Any]) -> User:
    """Shallow-merge request fields onto a user.

    ``name``, ``email`` and ``emergencyContacts`` are typed; anything else is
    kept as an opaque profile field. Identifiers and timestamps are ignored.
    """
    merged = replace(user, emergency_contacts=list(user.emergency_contacts), extra=dict(user.extra))
    for key, value in updates.items():
        if key in USER_IMMUTABLE_FIELDS:
            continue
        if key == "name":
            merged.name = str(value or "")
        elif key == "email":
            merged.email = str(value or "")
        elif key == "emergencyContacts":
            merged.emergency_contacts = [coerce_contact(item) for item in value or []]
        else:
            merged.extra[key] = value
    return merged
