"""Shared test fixtures for the swing coach backend.

FakeStore stands in for the Notion-backed store in API tests; StubNotionClient
stands in for notion_client.Client when testing NotionStore itself.
"""

from datetime import date
from typing import Any, Dict, List

import pytest

import golf_config
from app import create_app
from coach_chat import CoachChat
from dashboard import MissionStore
from errors import SignupLimitReached, StorageError
from notion_store import UserNotFound
from usage_gate import InMemoryUsageStore


class FakeStore:
    """In-memory replacement for NotionStore."""

    def __init__(self, signup_limit: int = 20) -> None:
        self.signup_limit = signup_limit
        self.users: Dict[str, Dict[str, Any]] = {}
        self.analyses: List[Dict[str, Any]] = []
        self.fail_saves = False

    def add_user(self, name: str, level: str = "1", growth_index: float = 0) -> Dict[str, Any]:
        user_id = f"user-{len(self.users) + 1}"
        self.users[user_id] = {
            "id": user_id,
            "name": name,
            "level": level,
            "status": "IN_PROGRESS",
            "growthIndex": growth_index,
        }
        return self.users[user_id]

    def list_users(self):
        return sorted(self.users.values(), key=lambda u: u["name"])

    def get_user(self, user_id):
        if user_id not in self.users:
            raise UserNotFound(user_id)
        return self.users[user_id]

    def create_user(self, name):
        if len(self.users) >= self.signup_limit:
            raise SignupLimitReached("cohort full")
        return self.add_user(name)

    def update_level(self, user_id, level):
        user = self.get_user(user_id)
        user["level"] = level
        return user

    def save_analysis(self, user_id, level, metrics, result, created_at=None):
        if self.fail_saves:
            raise StorageError("Save analysis failed")
        page = {
            "id": f"analysis-{len(self.analyses) + 1}",
            "user_id": user_id,
            "level": level,
            "metrics": metrics,
            "result": result,
        }
        self.analyses.append(page)
        return page


class StubEndpoint:
    """Records calls and returns queued responses for one Notion endpoint group."""

    def __init__(self, **responses: Any) -> None:
        self.responses = responses
        self.calls: List[tuple] = []

    def __getattr__(self, name: str):
        if name not in self.responses:
            raise AttributeError(name)

        def method(**kwargs):
            self.calls.append((name, kwargs))
            response = self.responses[name]
            if isinstance(response, Exception):
                raise response
            return response(**kwargs) if callable(response) else response

        return method


class StubNotionClient:
    def __init__(self, databases: StubEndpoint, pages: StubEndpoint) -> None:
        self.databases = databases
        self.pages = pages


def notion_user_page(page_id: str, name: str, level: str = "1", growth: float = 0) -> Dict[str, Any]:
    return {
        "id": page_id,
        "properties": {
            "Name": {"title": [{"plain_text": name}]},
            "Level": {"select": {"name": level}},
            "Level Status": {"select": {"name": "IN_PROGRESS"}},
            "Growth Index": {"number": growth},
        },
    }


@pytest.fixture(scope="session", autouse=True)
def log_to_tmp(tmp_path_factory):
    """Keep test runs from writing logs into the working tree."""
    golf_config.LOG_FILE = str(tmp_path_factory.mktemp("logs") / "golf_coach.log")


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def clock():
    """Mutable 'today' so tests can move across calendar days."""

    class Clock:
        day = date(2026, 5, 1)

        def __call__(self):
            return self.day

    return Clock()


@pytest.fixture
def missions() -> MissionStore:
    return MissionStore()


@pytest.fixture
def app(store, clock, missions):
    flask_app = create_app(
        store=store,
        usage_store=InMemoryUsageStore(),
        mission_store=missions,
        responder=CoachChat(reply_delay=0),
        today=clock,
    )
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()
