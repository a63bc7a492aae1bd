"""Tests for the Notion-backed store, against a stub client."""

from datetime import datetime

import httpx
import pytest
from notion_client import APIErrorCode
from notion_client.errors import APIResponseError, RequestTimeoutError

from conftest import StubEndpoint, StubNotionClient, notion_user_page
from errors import SignupLimitReached, StorageError
from notion_store import NotionStore, UserNotFound, user_from_page
from swing_models import AnalysisResult, ImpactTiming, SwingMetrics, SwingPath

DATABASES = {"users": "db-users", "swing_analysis": "db-analysis"}


def make_store(databases=None, pages=None, signup_limit=20):
    client = StubNotionClient(databases or StubEndpoint(), pages or StubEndpoint())
    return NotionStore(client=client, databases=DATABASES, signup_limit=signup_limit), client


def object_not_found():
    request = httpx.Request("GET", "https://api.notion.com/v1/pages/missing")
    response = httpx.Response(404, text="{}", request=request)
    return APIResponseError(response, "Could not find object", APIErrorCode.ObjectNotFound)


class TestUserFromPage:
    def test_maps_properties(self):
        page = notion_user_page("p1", "Tiger", level="Pro", growth=12.5)
        assert user_from_page(page) == {
            "id": "p1",
            "name": "Tiger",
            "level": "Pro",
            "status": "IN_PROGRESS",
            "growthIndex": 12.5,
        }

    def test_defaults_for_empty_properties(self):
        page = {
            "id": "p2",
            "properties": {
                "Name": {"title": []},
                "Level": {"select": None},
                "Level Status": {"select": None},
                "Growth Index": {"number": None},
            },
        }
        assert user_from_page(page) == {
            "id": "p2",
            "name": "Unnamed",
            "level": "1",
            "status": "IN_PROGRESS",
            "growthIndex": 0,
        }


class TestNotionStore:
    def test_list_users_sorted_by_name(self):
        databases = StubEndpoint(query={"results": [notion_user_page("a", "Ann"), notion_user_page("b", "Bo")]})
        store, _ = make_store(databases=databases)

        users = store.list_users()

        assert [u["name"] for u in users] == ["Ann", "Bo"]
        name, kwargs = databases.calls[0]
        assert name == "query"
        assert kwargs["database_id"] == "db-users"
        assert kwargs["sorts"] == [{"property": "Name", "direction": "ascending"}]

    def test_create_user_under_limit(self):
        databases = StubEndpoint(query={"results": [notion_user_page("a", "Ann")]})
        pages = StubEndpoint(create=notion_user_page("new", "Bo"))
        store, _ = make_store(databases=databases, pages=pages)

        user = store.create_user("Bo")

        assert user["id"] == "new"
        _, kwargs = pages.calls[0]
        assert kwargs["parent"] == {"database_id": "db-users"}
        assert kwargs["properties"]["Level"] == {"select": {"name": "1"}}
        assert kwargs["properties"]["Growth Index"] == {"number": 0}

    def test_create_user_at_limit(self):
        full = {"results": [notion_user_page(str(i), f"u{i}") for i in range(3)]}
        pages = StubEndpoint(create=notion_user_page("new", "Bo"))
        store, _ = make_store(databases=StubEndpoint(query=full), pages=pages, signup_limit=3)

        with pytest.raises(SignupLimitReached):
            store.create_user("Bo")
        assert pages.calls == []

    def test_update_level(self):
        pages = StubEndpoint(update=notion_user_page("p1", "Ann", level="Pro"))
        store, _ = make_store(pages=pages)

        assert store.update_level("p1", "Pro")["level"] == "Pro"
        _, kwargs = pages.calls[0]
        assert kwargs == {"page_id": "p1", "properties": {"Level": {"select": {"name": "Pro"}}}}

    def test_save_analysis_properties(self):
        pages = StubEndpoint(create={"id": "analysis-1"})
        store, _ = make_store(pages=pages)
        metrics = SwingMetrics(44, 37, SwingPath.NEUTRAL, ImpactTiming.EARLY)
        result = AnalysisResult(50, "ideal address angle ")

        page = store.save_analysis("p1", "1", metrics, result, created_at=datetime(2026, 5, 1, 9, 30))

        assert page["id"] == "analysis-1"
        _, kwargs = pages.calls[0]
        props = kwargs["properties"]
        assert kwargs["parent"] == {"database_id": "db-analysis"}
        assert props["User"] == {"relation": [{"id": "p1"}]}
        assert props["Level"] == {"number": 1}
        assert props["Analysis Name"]["title"][0]["text"]["content"] == "Analysis 2026-05-01 09:30:00"
        assert props["Swing Path"] == {"select": {"name": "Neutral"}}
        assert props["Impact Timing"] == {"select": {"name": "Early"}}
        assert props["Consistency Score"] == {"number": 50}
        assert props["AI Comment"]["rich_text"][0]["text"]["content"] == "ideal address angle "

    def test_save_analysis_non_numeric_level(self):
        pages = StubEndpoint(create={"id": "analysis-1"})
        store, _ = make_store(pages=pages)
        metrics = SwingMetrics(44, 37, SwingPath.NEUTRAL, ImpactTiming.EARLY)

        store.save_analysis("p1", "Pro", metrics, AnalysisResult(50, ""))

        assert pages.calls[0][1]["properties"]["Level"] == {"number": None}

    def test_timeout_becomes_storage_error(self):
        store, _ = make_store(databases=StubEndpoint(query=RequestTimeoutError()))
        with pytest.raises(StorageError):
            store.list_users()

    def test_describe_users_schema(self):
        databases = StubEndpoint(retrieve={"properties": {"Name": {}, "Level": {}, "Growth Index": {}}})
        store, _ = make_store(databases=databases)
        assert store.describe_users_schema() == ["Growth Index", "Level", "Name"]

    def test_connection_error_becomes_storage_error(self):
        store, _ = make_store(databases=StubEndpoint(query=httpx.ConnectError("connection refused")))
        with pytest.raises(StorageError):
            store.list_users()

    def test_missing_user_page(self):
        store, _ = make_store(pages=StubEndpoint(retrieve=object_not_found(), update=object_not_found()))

        with pytest.raises(UserNotFound):
            store.get_user("missing")
        with pytest.raises(UserNotFound):
            store.update_level("missing", "Pro")

    def test_missing_database_is_not_a_missing_user(self):
        """A wrong database id is a configuration problem, not an unknown user."""
        pages = StubEndpoint(create=object_not_found())
        store, _ = make_store(databases=StubEndpoint(query=object_not_found()), pages=pages)
        metrics = SwingMetrics(44, 37, SwingPath.NEUTRAL, ImpactTiming.EARLY)

        with pytest.raises(StorageError) as excinfo:
            store.list_users()
        assert not isinstance(excinfo.value, UserNotFound)

        with pytest.raises(StorageError) as excinfo:
            store.save_analysis("p1", "1", metrics, AnalysisResult(50, ""))
        assert not isinstance(excinfo.value, UserNotFound)

    def test_zero_signup_limit_refuses_everyone(self):
        pages = StubEndpoint(create=notion_user_page("new", "Bo"))
        store, _ = make_store(databases=StubEndpoint(query={"results": []}), pages=pages, signup_limit=0)

        assert store.signup_limit == 0
        with pytest.raises(SignupLimitReached):
            store.create_user("Bo")
        assert pages.calls == []
