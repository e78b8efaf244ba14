"""
Account Service - sign-up, sign-in and the onboarding profile.

Wraps Supabase auth. The ``isNewUser`` metadata flag is set at sign-up and
cleared by the first profile update, which gates onboarding in the client.
"""

import logging
from typing import Callable, Optional

from selfsight.features.profiles.models import AuthSession, User, UserProfile
from selfsight.services.local_cache import LocalCache, profile_key
from selfsight.shared.errors import AuthenticationError, StoreError, ValidationError
from selfsight.shared.logging_utils import redact_emails

logger = logging.getLogger("SelfSight.Accounts")


class AccountService:
    """
    Args:
        client: shared Supabase client (token checks, admin metadata updates)
        auth_client_factory: builds a fresh client for each sign-in/sign-up
        cache: local cache holding profile copies
    """

    def __init__(self, client, auth_client_factory: Callable[[], object], cache: LocalCache):
        self.client = client
        self.auth_client_factory = auth_client_factory
        self.cache = cache

    @staticmethod
    def _session(response, is_new: bool = False) -> AuthSession:
        if response.user is None or response.session is None:
            raise AuthenticationError("No session was returned; check your email to confirm the account")
        return AuthSession(
            access_token=response.session.access_token,
            refresh_token=response.session.refresh_token,
            expires_at=response.session.expires_at,
            user=User.from_supabase(response.user, is_new=is_new),
        )

    def signup(self, name: str, email: str, password: str) -> AuthSession:
        if not email or not password:
            raise ValidationError("Email and password are required")

        try:
            response = self.auth_client_factory().auth.sign_up({
                "email": email,
                "password": password,
                "options": {"data": {"name": name, "isNewUser": True}},
            })
        except Exception as e:
            logger.warning("Signup failed for %s: %s", redact_emails(email), e)
            raise AuthenticationError("Signup failed. Please try again.") from e

        logger.info("Account created")
        return self._session(response, is_new=True)

    def login(self, email: str, password: str) -> AuthSession:
        try:
            response = self.auth_client_factory().auth.sign_in_with_password({
                "email": email,
                "password": password,
            })
        except Exception as e:
            logger.info("Login failed for %s: %s", redact_emails(email), e)
            raise AuthenticationError("Invalid email or password") from e

        return self._session(response)

    def logout(self, access_token: str) -> None:
        """Revoke the session behind an access token."""
        try:
            self.client.auth.admin.sign_out(access_token)
        except Exception as e:
            # The token may already be expired; the client drops it either way.
            logger.info("Sign-out could not revoke the session: %s", e)

    def reset_password(self, email: str) -> None:
        if not email:
            raise ValidationError("Email is required")
        try:
            self.auth_client_factory().auth.reset_password_for_email(email)
        except Exception as e:
            logger.warning("Password reset failed for %s: %s", redact_emails(email), e)
            raise StoreError("Could not send the password reset email", operation="reset_password") from e

    def get_user(self, access_token: Optional[str]) -> User:
        """Resolve an access token to the signed-in user."""
        if not access_token:
            raise AuthenticationError()
        try:
            response = self.client.auth.get_user(access_token)
        except Exception as e:
            logger.info("Rejected access token: %s", e)
            raise AuthenticationError("Session expired or invalid") from e

        if response is None or response.user is None:
            raise AuthenticationError("Session expired or invalid")
        return User.from_supabase(response.user)

    def get_profile(self, user: User) -> UserProfile:
        cached = self.cache.get(profile_key(user.id))
        if cached:
            return UserProfile.model_validate(cached)
        return user.profile or UserProfile()

    def update_profile(self, user: User, profile: UserProfile) -> User:
        """Save the profile and clear the new-user flag."""
        try:
            self.client.auth.admin.update_user_by_id(
                user.id,
                {"user_metadata": {"name": user.name, "isNewUser": False, "profile": profile.model_dump()}},
            )
        except Exception as e:
            logger.error("Profile metadata update failed for user %s: %s", user.id, e)
            raise StoreError("Failed to update profile. Please try again.", operation="update_user") from e

        self.cache.set(profile_key(user.id), profile.model_dump())
        logger.info("Profile updated for user %s", user.id)
        return user.model_copy(update={"is_new_user": False, "profile": profile})
