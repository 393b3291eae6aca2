from .errors import NotFoundError, ServiceError, UpstreamError, ValidationError, failure_boundary
from .models import EmergencyContact, User, apply_user_updates, merge_contact
from .settings import DEFAULT_VOICE_ID, ELEVENLABS_MODEL, GEMINI_MODEL, Settings, bootstrap_local_env

__all__ = [
    "DEFAULT_VOICE_ID",
    "ELEVENLABS_MODEL",
    "GEMINI_MODEL",
    "EmergencyContact",
    "NotFoundError",
    "ServiceError",
    "Settings",
    "UpstreamError",
    "User",
    "ValidationError",
    "apply_user_updates",
    "bootstrap_local_env",
    "failure_boundary",
    "merge_contact",
]
