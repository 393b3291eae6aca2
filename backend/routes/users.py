from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from haven_app import HavenApp
from haven_core.errors import NotFoundError, ValidationError, failure_boundary
from haven_core.models import User, merge_contact

from .deps import get_container

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/users", tags=["users"])


class CreateUserRequest(BaseModel):
    # Untyped so falsy values get the 400 below rather than a schema error.
    name: Any = None
    email: Any = None


class AddContactRequest(BaseModel):
    name: Any = None
    phone: Any = None
    relationship: str | None = None


def _require_user(container: HavenApp, user_id: str) -> User:
    user = container.users.get_by_id(user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


@router.post("/", include_in_schema=False)
@router.post("")
def create_user(payload: CreateUserRequest | None = None, container: HavenApp = Depends(get_container)):
    with failure_boundary(logger, "User creation error", "Failed to create user"):
        name = payload.name if payload else None
        email = payload.email if payload else None
        if not name or not email:
            raise ValidationError("Name and email are required")

        name, email = str(name), str(email)
        existing = container.users.get_by_email(email)
        if existing is not None:
            return existing.to_document()

        user = container.users.create(name=name, email=email)
        return JSONResponse(
            status_code=201,
            content={"userId": user.id, "name": user.name, "email": user.email},
        )


@router.get("/email/{email}")
def get_user_by_email(email: str, container: HavenApp = Depends(get_container)):
    with failure_boundary(logger, "User fetch error", "Failed to fetch user"):
        user = container.users.get_by_email(email)
        if user is None:
            raise NotFoundError("User not found")
        return user.to_document()


@router.get("/{user_id}")
def get_user(user_id: str, container: HavenApp = Depends(get_container)):
    with failure_boundary(logger, "User fetch error", "Failed to fetch user"):
        return _require_user(container, user_id).to_document()


@router.put("/{user_id}")
def update_user(
    user_id: str,
    updates: dict[str, Any] | None = Body(default=None),
    container: HavenApp = Depends(get_container),
):
    with failure_boundary(logger, "User update error", "Failed to update user"):
        user = container.users.update(user_id, updates or {})
        if user is None:
            raise NotFoundError("User not found")
        return user.to_document()


@router.post("/{user_id}/contacts")
def add_contact(
    user_id: str,
    payload: AddContactRequest | None = None,
    container: HavenApp = Depends(get_container),
):
    with failure_boundary(logger, "Add contact error", "Failed to add contact"):
        name = payload.name if payload else None
        phone = payload.phone if payload else None
        if not name or not phone:
            raise ValidationError("Name and phone are required")

        user = container.users.add_emergency_contact(
            user_id,
            name=str(name),
            phone=str(phone),
            relationship=payload.relationship,
        )
        if user is None:
            raise NotFoundError("User not found")
        return {"message": "Contact added", "contacts": user.contacts_document()}


@router.get("/{user_id}/profile")
def get_profile(user_id: str, container: HavenApp = Depends(get_container)):
    with failure_boundary(logger, "Profile fetch error", "Failed to fetch profile"):
        return container.profiles.get_profile(user_id)


@router.patch("/{user_id}/contacts/{contact_id}")
def update_contact(
    user_id: str,
    contact_id: str,
    updates: dict[str, Any] | None = Body(default=None),
    container: HavenApp = Depends(get_container),
):
    with failure_boundary(logger, "Update contact error", "Failed to update contact"):
        user = _require_user(container, user_id)
        contacts = list(user.emergency_contacts)

        index = next((i for i, contact in enumerate(contacts) if str(contact.id) == contact_id), None)
        if index is None:
            raise NotFoundError("Contact not found")

        contacts[index] = merge_contact(contacts[index], updates or {})
        if container.users.update(user.id, {"emergencyContacts": contacts}) is None:
            raise NotFoundError("User not found")
        return contacts[index].to_document()


@router.delete("/{user_id}/contacts/{contact_id}")
def delete_contact(user_id: str, contact_id: str, container: HavenApp = Depends(get_container)):
    with failure_boundary(logger, "Delete contact error", "Failed to delete contact"):
        user = _require_user(container, user_id)
        remaining = [contact for contact in user.emergency_contacts if str(contact.id) != contact_id]
        if len(remaining) == len(user.emergency_contacts):
            raise NotFoundError("Contact not found")

        if container.users.update(user.id, {"emergencyContacts": remaining}) is None:
            raise NotFoundError("User not found")
        return {"message": "Contact deleted", "contacts": [contact.to_document() for contact in remaining]}
