"""Shared fixtures: in-memory Supabase, stubbed server functions, temp cache."""

import json
import uuid
from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import httpx
import pytest

from selfsight.features.analysis.remote import RemoteAnalyzerClient
from selfsight.features.database.repositories.entries import EntriesRepository
from selfsight.features.entries.store import EntryStore
from selfsight.features.profiles.service import AccountService
from selfsight.features.recommendations.generator import RecommendationGenerator
from selfsight.features.recommendations.service import RecommendationService
from selfsight.services.functions_client import FunctionsClient
from selfsight.services.http_client import HTTPClientManager
from selfsight.services.local_cache import LocalCache

USER_ID = "user-1"
VALID_TOKEN = "valid-token"
BASE_TIME = datetime(2025, 3, 7, 21, 5, tzinfo=timezone.utc)


# =============================================================================
# SUPABASE FAKE
# =============================================================================

class FakeTable:
    def __init__(self):
        self.rows = []
        self.fail = False


class FakeQuery:
    """Just enough of the postgrest builder for the entries repository."""

    def __init__(self, table: FakeTable):
        self.table = table
        self.op = "select"
        self.payload = None
        self.filters = []
        self.order_by = None

    def select(self, *_columns):
        self.op = "select"
        return self

    def insert(self, payload):
        self.op, self.payload = "insert", payload
        return self

    def update(self, payload):
        self.op, self.payload = "update", payload
        return self

    def delete(self):
        self.op = "delete"
        return self

    def eq(self, column, value):
        self.filters.append((column, value))
        return self

    def order(self, column, desc=False):
        self.order_by = (column, desc)
        return self

    def _matches(self, row):
        return all(row.get(column) == value for column, value in self.filters)

    def execute(self):
        if self.table.fail:
            raise RuntimeError("connection refused")

        if self.op == "insert":
            # Later inserts sort as newer.
            created = BASE_TIME + timedelta(minutes=len(self.table.rows))
            row = {
                "id": str(uuid.uuid4()),
                "created_at": created.isoformat(),
                **self.payload,
            }
            self.table.rows.append(row)
            return SimpleNamespace(data=[dict(row)])

        matched = [row for row in self.table.rows if self._matches(row)]

        if self.op == "update":
            for row in matched:
                row.update(self.payload)
            return SimpleNamespace(data=[dict(row) for row in matched])

        if self.op == "delete":
            self.table.rows = [row for row in self.table.rows if row not in matched]
            return SimpleNamespace(data=matched)

        if self.order_by:
            column, desc = self.order_by
            matched = sorted(matched, key=lambda row: row[column], reverse=desc)
        return SimpleNamespace(data=[dict(row) for row in matched])


class FakeAdmin:
    def __init__(self):
        self.updated = []
        self.signed_out = []
        self.fail = False

    def update_user_by_id(self, user_id, attributes):
        if self.fail:
            raise RuntimeError("admin API unavailable")
        self.updated.append((user_id, attributes))

    def sign_out(self, token):
        self.signed_out.append(token)


class FakeAuth:
    def __init__(self):
        self.admin = FakeAdmin()
        self.signups = []
        self.reset_requests = []
        self.require_confirmation = False
        self.fail_reset = False
        self.users = {
            VALID_TOKEN: SimpleNamespace(
                id=USER_ID,
                email="ada@example.com",
                user_metadata={"name": "Ada", "isNewUser": True},
            )
        }

    def get_user(self, token):
        if token not in self.users:
            raise RuntimeError("invalid JWT")
        return SimpleNamespace(user=self.users[token])

    def sign_in_with_password(self, credentials):
        if credentials["password"] != "correct horse":
            raise RuntimeError("Invalid login credentials")
        return SimpleNamespace(
            user=self.users[VALID_TOKEN],
            session=SimpleNamespace(access_token=VALID_TOKEN, refresh_token="refresh", expires_at=1700000000),
        )

    def sign_up(self, credentials):
        self.signups.append(credentials)
        user = SimpleNamespace(
            id="user-2",
            email=credentials["email"],
            user_metadata=credentials["options"]["data"],
        )
        session = None
        if not self.require_confirmation:
            session = SimpleNamespace(access_token="new-token", refresh_token="refresh", expires_at=1700000000)
        return SimpleNamespace(user=user, session=session)

    def reset_password_for_email(self, email):
        if self.fail_reset:
            raise RuntimeError("smtp down")
        self.reset_requests.append(email)


class FakeSupabase:
    def __init__(self):
        self.tables = {}
        self.auth = FakeAuth()

    def table(self, name):
        return FakeQuery(self.tables.setdefault(name, FakeTable()))

    def entries_table(self) -> FakeTable:
        return self.tables.setdefault("journal_entries", FakeTable())


# =============================================================================
# SERVER FUNCTION STUB
# =============================================================================

class FunctionStub:
    """MockTransport handler answering per function name."""

    def __init__(self):
        self.calls = []
        self.replies = {}

    def reply(self, name, reply):
        """``reply`` is an httpx.Response, an exception to raise, or a callable."""
        self.replies[name] = reply

    def __call__(self, request: httpx.Request) -> httpx.Response:
        name = request.url.path.rsplit("/", 1)[-1]
        self.calls.append((name, json.loads(request.content or b"{}")))

        reply = self.replies.get(name)
        if reply is None:
            return httpx.Response(404, json={"error": f"unknown function {name}"})
        if isinstance(reply, Exception):
            raise reply
        if callable(reply):
            return reply(request)
        return reply


# =============================================================================
# FIXTURES
# =============================================================================

@pytest.fixture
def supabase():
    return FakeSupabase()


@pytest.fixture
def cache(tmp_path):
    return LocalCache(tmp_path / "cache")


@pytest.fixture
def function_stub():
    return FunctionStub()


@pytest.fixture
def functions_client(function_stub):
    return FunctionsClient(
        base_url="http://functions.test/functions/v1",
        api_key="test-key",
        http=HTTPClientManager(transport=httpx.MockTransport(function_stub)),
    )


@pytest.fixture
def repository(supabase):
    return EntriesRepository(supabase, table="journal_entries")


@pytest.fixture
def store(repository, cache, functions_client):
    return EntryStore(repository, cache, RemoteAnalyzerClient(functions_client))


@pytest.fixture
def recommendation_service(cache, functions_client):
    return RecommendationService(cache, RecommendationGenerator(functions_client))


@pytest.fixture
def accounts(supabase, cache):
    return AccountService(client=supabase, auth_client_factory=lambda: supabase, cache=cache)


class FakeMessages:
    def __init__(self, replies):
        self.replies = list(replies)
        self.calls = []

    def create(self, **kwargs):
        self.calls.append(kwargs)
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return SimpleNamespace(content=[SimpleNamespace(text=reply)])


class FakeAnthropic:
    """Stands in for ``anthropic.Anthropic``; replies are returned in order."""

    def __init__(self, *replies):
        self.messages = FakeMessages(replies)


@pytest.fixture
def make_anthropic():
    return FakeAnthropic


def make_entry_row(**overrides):
    row = {
        "id": str(uuid.uuid4()),
        "user_id": USER_ID,
        "title": "A day",
        "content": "Some words",
        "created_at": BASE_TIME.isoformat(),
        "tags": [],
    }
    row.update(overrides)
    return row


@pytest.fixture
def entry_row():
    return make_entry_row
