"""Account and profile models."""

from typing import Any, Dict, Optional

from pydantic import BaseModel


class UserProfile(BaseModel):
    """Free-text self description collected during onboarding."""
    personality: str = ""
    values: str = ""
    strengths: str = ""
    goals: str = ""


class User(BaseModel):
    id: str
    email: str
    name: str
    is_new_user: bool = False
    profile: Optional[UserProfile] = None

    @classmethod
    def from_supabase(cls, supabase_user: Any, is_new: bool = False) -> "User":
        """Map a Supabase auth user; name falls back to the email's local part."""
        metadata: Dict[str, Any] = getattr(supabase_user, "user_metadata", None) or {}
        email = getattr(supabase_user, "email", None) or ""
        profile = metadata.get("profile")

        return cls(
            id=str(supabase_user.id),
            email=email,
            name=metadata.get("name") or email.split("@")[0],
            is_new_user=is_new or bool(metadata.get("isNewUser", False)),
            profile=UserProfile.model_validate(profile) if isinstance(profile, dict) else None,
        )


class AuthSession(BaseModel):
    """Opaque session handle returned to the client."""
    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[int] = None
    user: User
