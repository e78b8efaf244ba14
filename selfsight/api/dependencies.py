from functools import lru_cache
from typing import Optional

from fastapi import Depends, Header

from selfsight.core.database import get_supabase, new_auth_client
from selfsight.features.analysis.remote import RemoteAnalyzerClient
from selfsight.features.database import get_database_client
from selfsight.features.entries.store import EntryStore
from selfsight.features.profiles.models import User
from selfsight.features.profiles.service import AccountService
from selfsight.features.recommendations.generator import RecommendationGenerator
from selfsight.features.recommendations.service import RecommendationService
from selfsight.services.functions_client import FunctionsClient
from selfsight.services.llm import ClaudeJournalAnalyzer
from selfsight.services.local_cache import LocalCache
from selfsight.shared.errors import AuthenticationError


@lru_cache(maxsize=1)
def get_local_cache() -> LocalCache:
    return LocalCache()


@lru_cache(maxsize=1)
def get_functions_client() -> FunctionsClient:
    return FunctionsClient()


@lru_cache(maxsize=1)
def get_llm_analyzer() -> ClaudeJournalAnalyzer:
    """Provide a singleton Claude analyzer for the hosted functions."""
    return ClaudeJournalAnalyzer()


@lru_cache(maxsize=1)
def get_entry_store() -> EntryStore:
    return EntryStore(
        repository=get_database_client().entries,
        cache=get_local_cache(),
        analyzer=RemoteAnalyzerClient(get_functions_client()),
    )


@lru_cache(maxsize=1)
def get_recommendation_service() -> RecommendationService:
    return RecommendationService(
        cache=get_local_cache(),
        generator=RecommendationGenerator(get_functions_client()),
    )


@lru_cache(maxsize=1)
def get_account_service() -> AccountService:
    return AccountService(
        client=get_supabase(),
        auth_client_factory=new_auth_client,
        cache=get_local_cache(),
    )


def get_bearer_token(authorization: Optional[str] = Header(default=None)) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_user(
    token: Optional[str] = Depends(get_bearer_token),
    accounts: AccountService = Depends(get_account_service),
) -> User:
    """Resolve the signed-in user or reject the request before any other work."""
    if not token:
        raise AuthenticationError("User must be logged in")
    return accounts.get_user(token)
