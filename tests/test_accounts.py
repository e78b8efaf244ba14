import pytest

from selfsight.features.profiles.models import UserProfile
from selfsight.services.local_cache import profile_key
from selfsight.shared.errors import AuthenticationError, StoreError, ValidationError

from conftest import USER_ID, VALID_TOKEN


def test_get_user_maps_metadata(accounts):
    user = accounts.get_user(VALID_TOKEN)

    assert user.id == USER_ID
    assert user.name == "Ada"
    assert user.is_new_user is True


@pytest.mark.parametrize("token", [None, "", "expired-token"])
def test_get_user_rejects_bad_tokens(accounts, token):
    with pytest.raises(AuthenticationError):
        accounts.get_user(token)


def test_login(accounts):
    session = accounts.login("ada@example.com", "correct horse")

    assert session.access_token == VALID_TOKEN
    assert session.user.email == "ada@example.com"


def test_login_with_wrong_password(accounts):
    with pytest.raises(AuthenticationError):
        accounts.login("ada@example.com", "wrong")


def test_logout_never_raises(accounts, supabase):
    accounts.logout("any-token")

    assert supabase.auth.admin.signed_out == ["any-token"]


def test_update_profile_completes_onboarding(accounts, supabase, cache):
    user = accounts.get_user(VALID_TOKEN)
    profile = UserProfile(personality="curious", values="honesty", strengths="listening", goals="run a 10k")

    updated = accounts.update_profile(user, profile)

    assert updated.is_new_user is False
    assert cache.get(profile_key(USER_ID))["goals"] == "run a 10k"
    (user_id, attributes), = supabase.auth.admin.updated
    assert user_id == USER_ID
    assert attributes["user_metadata"]["isNewUser"] is False
    assert accounts.get_profile(user) == profile


def test_profile_defaults_to_empty(accounts):
    assert accounts.get_profile(accounts.get_user(VALID_TOKEN)) == UserProfile()


def test_failed_profile_update_keeps_previous_profile(accounts, supabase, cache):
    user = accounts.get_user(VALID_TOKEN)
    supabase.auth.admin.fail = True

    with pytest.raises(StoreError):
        accounts.update_profile(user, UserProfile(goals="new goal"))

    assert cache.get(profile_key(USER_ID)) is None
    assert accounts.get_profile(user).goals == ""


def test_signup_flags_new_user(accounts, supabase):
    session = accounts.signup("Grace", "grace@example.com", "hunter22")

    assert session.access_token == "new-token"
    assert session.user.name == "Grace"
    assert session.user.is_new_user is True
    (credentials,) = supabase.auth.signups
    assert credentials["options"]["data"] == {"name": "Grace", "isNewUser": True}


def test_signup_without_session_asks_for_confirmation(accounts, supabase):
    supabase.auth.require_confirmation = True

    with pytest.raises(AuthenticationError):
        accounts.signup("Grace", "grace@example.com", "hunter22")


def test_signup_requires_credentials(accounts, supabase):
    with pytest.raises(ValidationError):
        accounts.signup("Grace", "", "hunter22")

    assert supabase.auth.signups == []


def test_reset_password(accounts, supabase):
    accounts.reset_password("ada@example.com")

    assert supabase.auth.reset_requests == ["ada@example.com"]


def test_reset_password_failure(accounts, supabase):
    supabase.auth.fail_reset = True

    with pytest.raises(StoreError):
        accounts.reset_password("ada@example.com")


def test_reset_password_requires_email(accounts):
    with pytest.raises(ValidationError):
        accounts.reset_password("")
