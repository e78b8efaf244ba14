"""Accounts and onboarding profile."""

from selfsight.features.profiles.models import AuthSession, User, UserProfile
from selfsight.features.profiles.service import AccountService

__all__ = [
    "AccountService",
    "AuthSession",
    "User",
    "UserProfile",
]
