"""Tests for the per-resource services against a mocked client."""

from __future__ import annotations

import pytest

from backend.services import lists as lists_service
from backend.services.lists import (
    build_status_filter,
    fetch_list_statuses,
    fetch_lists,
    find_list_status_attribute,
    query_list_entries,
)
from backend.services.meetings import fetch_meetings
from backend.services.notes import fetch_notes
from backend.services.records import fetch_objects, query_records
from backend.services.tasks import fetch_tasks
from backend.services.webhooks import (
    create_webhook,
    delete_webhook,
    fetch_webhooks,
    update_webhook,
)


def _list_payload(index: int) -> dict:
    return {
        "id": {"list_id": f"l{index}"},
        "api_slug": f"list_{index}",
        "name": f"List {index}",
        "parent_object": ["companies"],
    }


def _webhook_payload() -> dict:
    return {
        "id": {"webhook_id": "wh-1"},
        "target_url": "https://example.com/hook",
        "status": "active",
        "subscriptions": [{"event_type": "record.created", "filter": None}],
        "created_at": "2026-01-22T09:00:00Z",
    }


class TestRecords:
    """Test objects and records."""

    @pytest.mark.asyncio
    async def test_fetch_objects_skips_missing_slugs(self, mock_client):
        mock_client.get.return_value = {
            "data": [
                {"id": {"object_id": "o1"}, "api_slug": "companies", "plural_noun": "Companies"},
                {"id": {"object_id": "o2"}, "api_slug": None},
            ]
        }
        objects = await fetch_objects(mock_client)
        assert [o.api_slug for o in objects] == ["companies"]
        mock_client.get.assert_awaited_once_with("/v2/objects")

    @pytest.mark.asyncio
    async def test_query_records_sends_offset(self, mock_client):
        mock_client.post.return_value = {
            "data": [{"id": {"record_id": f"r{i}", "object_id": "o1"}, "values": {}} for i in range(2)]
        }
        page = await query_records(mock_client, "companies", cursor="2", limit=2)

        mock_client.post.assert_awaited_once_with(
            "/v2/objects/companies/records/query", json={"limit": 2, "offset": 2}
        )
        assert [r.id for r in page.items] == ["r0", "r1"]
        assert page.next_cursor == "4"

    @pytest.mark.asyncio
    async def test_query_records_first_page_has_no_offset(self, mock_client):
        page = await query_records(mock_client, "people")
        _, kwargs = mock_client.post.call_args
        assert "offset" not in kwargs["json"]
        assert page.next_cursor is None


class TestLists:
    """Test lists, statuses and entries."""

    @pytest.mark.asyncio
    async def test_fetch_lists_slices_locally(self, mock_client):
        """Later pages reuse the first page's fetch."""
        lists_service._list_cache.clear()
        mock_client.get.return_value = {"data": [_list_payload(i) for i in range(3)]}

        first = await fetch_lists(mock_client, limit=2)
        second = await fetch_lists(mock_client, cursor=first.next_cursor, limit=2)

        assert [lst.id for lst in first.items] == ["l0", "l1"]
        assert first.next_cursor == "2"
        assert [lst.id for lst in second.items] == ["l2"]
        assert second.next_cursor is None
        assert mock_client.get.await_count == 1
        assert first.items[0].parent_object == "companies"

    @pytest.mark.asyncio
    async def test_fetch_lists_first_page_always_refetches(self, mock_client):
        lists_service._list_cache.clear()
        mock_client.get.return_value = {"data": [_list_payload(0)]}
        await fetch_lists(mock_client)
        await fetch_lists(mock_client)
        assert mock_client.get.await_count == 2

    @pytest.mark.asyncio
    async def test_query_list_entries_detects_more(self, mock_client):
        """One extra row is requested to tell whether another page exists."""
        mock_client.post.return_value = {
            "data": [
                {"id": {"entry_id": f"e{i}", "list_id": "l1"}, "parent_record_id": f"r{i}"}
                for i in range(3)
            ]
        }
        status_filter = build_status_filter("stage", "s1")
        page = await query_list_entries(mock_client, "l1", limit=2, filter=status_filter)

        mock_client.post.assert_awaited_once_with(
            "/v2/lists/l1/entries/query",
            json={"limit": 3, "filter": {"stage": {"status": {"$eq": "s1"}}}},
        )
        assert [e.id for e in page.items] == ["e0", "e1"]
        assert page.next_cursor == "2"

    @pytest.mark.asyncio
    async def test_query_list_entries_last_page(self, mock_client):
        mock_client.post.return_value = {"data": [{"id": {"entry_id": "e9"}}]}
        page = await query_list_entries(mock_client, "l1", cursor="4", limit=2)
        _, kwargs = mock_client.post.call_args
        assert kwargs["json"]["offset"] == 4
        assert page.items[0].list_id == "l1"
        assert page.next_cursor is None

    @pytest.mark.asyncio
    async def test_find_list_status_attribute(self, mock_client):
        mock_client.get.return_value = {
            "data": [
                {"type": "text", "api_slug": "notes"},
                {
                    "type": "status",
                    "api_slug": "stage",
                    "title": "Stage",
                    "id": {"attribute_id": "a1"},
                },
            ]
        }
        attribute = await find_list_status_attribute(mock_client, "l1")
        assert attribute == {"slug": "stage", "title": "Stage", "attribute_id": "a1"}

    @pytest.mark.asyncio
    async def test_find_list_status_attribute_missing(self, mock_client):
        assert await find_list_status_attribute(mock_client, "l1") is None

    @pytest.mark.asyncio
    async def test_fetch_list_statuses(self, mock_client):
        mock_client.get.return_value = {
            "data": [
                {
                    "id": {"status_id": "s1", "attribute_id": "a1"},
                    "title": "Won",
                    "celebration_enabled": True,
                }
            ]
        }
        statuses = await fetch_list_statuses(mock_client, "l1", "stage")
        mock_client.get.assert_awaited_once_with("/v2/lists/l1/attributes/stage/statuses")
        assert statuses[0].title == "Won"
        assert statuses[0].celebration_enabled is True
        assert statuses[0].is_archived is False


class TestActivity:
    """Test notes, tasks and meetings."""

    @pytest.mark.asyncio
    async def test_fetch_notes_with_parent(self, mock_client):
        mock_client.get.return_value = {
            "data": [
                {
                    "id": {"note_id": "n1"},
                    "title": "Kickoff",
                    "created_by_actor": {"type": "workspace-member", "id": "m1"},
                }
            ]
        }
        page = await fetch_notes(mock_client, parent_object="companies", parent_record_id="r1")
        mock_client.get.assert_awaited_once_with(
            "/v2/notes",
            params={"limit": 25, "parent_object": "companies", "parent_record_id": "r1"},
        )
        assert page.items[0].created_by_type == "workspace-member"

    @pytest.mark.asyncio
    async def test_fetch_tasks_completion_filter(self, mock_client):
        await fetch_tasks(mock_client, cursor="25", is_completed=False)
        mock_client.get.assert_awaited_once_with(
            "/v2/tasks", params={"limit": 25, "offset": 25, "is_completed": "false"}
        )

    @pytest.mark.asyncio
    async def test_fetch_meetings_uses_opaque_cursor(self, mock_client):
        mock_client.get.return_value = {
            "data": [
                {
                    "id": {"meeting_id": "m1"},
                    "title": "Standup",
                    "start": {"datetime": "2026-01-22T09:00:00Z"},
                    "end": {"date": "2026-01-22"},
                    "participants": [{"email_address": "ada@example.com", "is_organizer": True}],
                }
            ],
            "pagination": {"next_cursor": "abc"},
        }
        page = await fetch_meetings(mock_client, cursor="xyz")

        mock_client.get.assert_awaited_once_with(
            "/v2/meetings", params={"limit": 25, "cursor": "xyz"}
        )
        meeting = page.items[0]
        assert meeting.start_at == "2026-01-22T09:00:00Z"
        assert meeting.end_at == "2026-01-22"
        assert meeting.participants[0].is_organizer is True
        assert page.next_cursor == "abc"


class TestWebhooks:
    """Test webhook listing and mutations."""

    @pytest.mark.asyncio
    async def test_fetch_webhooks(self, mock_client):
        mock_client.get.return_value = {"data": [_webhook_payload()]}
        page = await fetch_webhooks(mock_client)
        webhook = page.items[0]
        assert webhook.id == "wh-1"
        assert webhook.subscriptions[0].event_type == "record.created"
        assert page.next_cursor is None

    @pytest.mark.asyncio
    async def test_create_webhook(self, mock_client):
        mock_client.post.return_value = {"data": _webhook_payload()}
        webhook = await create_webhook(mock_client, "https://example.com/hook", ["record.created"])

        mock_client.post.assert_awaited_once_with(
            "/v2/webhooks",
            json={
                "data": {
                    "target_url": "https://example.com/hook",
                    "subscriptions": [{"event_type": "record.created", "filter": None}],
                }
            },
        )
        assert webhook.target_url == "https://example.com/hook"

    @pytest.mark.asyncio
    async def test_create_webhook_without_data_raises(self, mock_client):
        mock_client.post.return_value = {}
        with pytest.raises(ValueError, match="No webhook data returned"):
            await create_webhook(mock_client, "https://example.com/hook", [])

    @pytest.mark.asyncio
    async def test_update_webhook_sends_only_given_fields(self, mock_client):
        mock_client.patch.return_value = {"data": _webhook_payload()}
        await update_webhook(mock_client, "wh-1", status="paused")
        mock_client.patch.assert_awaited_once_with(
            "/v2/webhooks/wh-1", json={"data": {"status": "paused"}}
        )

    @pytest.mark.asyncio
    async def test_delete_webhook(self, mock_client):
        await delete_webhook(mock_client, "wh-1")
        mock_client.delete.assert_awaited_once_with("/v2/webhooks/wh-1")
