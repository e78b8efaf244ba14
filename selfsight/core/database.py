"""Supabase client construction."""

import logging
from functools import lru_cache

from supabase import Client, create_client
from supabase.client import ClientOptions

from selfsight.core.config import settings
from selfsight.shared.errors import ConfigurationError

logger = logging.getLogger("SelfSight.Database")


def _require_credentials() -> None:
    if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
        raise ConfigurationError("SUPABASE_URL and SUPABASE_KEY must be set")


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    """Create the shared Supabase client on first use."""
    _require_credentials()
    client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    logger.info("Supabase client created for %s", settings.SUPABASE_URL)
    return client


def new_auth_client() -> Client:
    """
    Fresh client for one sign-in/sign-up call.

    Signing in stores the user's session on the client, so it must never
    happen on the shared client used for table access.
    """
    _require_credentials()
    return create_client(
        settings.SUPABASE_URL,
        settings.SUPABASE_KEY,
        options=ClientOptions(persist_session=False, auto_refresh_token=False),
    )
