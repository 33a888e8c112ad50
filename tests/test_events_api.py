"""Tests for the document creation event endpoint"""

from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from dispatcher.v1.core.exceptions import PushSendError, SendFailureKind

EVENTS_URL = "/v1/events/document-created"


def test_created_job_is_sent(client: TestClient, stub_sender):
    response = client.post(
        EVENTS_URL,
        json={
            "collection": "notification_jobs",
            "document_id": "job-1",
            "fields": {"token": "abc", "title": "Hi", "body": "There"},
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["ok"] is True
    assert data["message"] == "Dispatch sent"
    assert data["data"]["outcome"] == "sent"
    assert data["data"]["target"] == "abc"
    assert data["data"]["message_id"].startswith("stub-")
    assert "X-Request-ID" in response.headers

    [message] = stub_sender.sent
    assert message.model_dump() == {
        "target": "abc",
        "notification": {"title": "Hi", "body": "There"},
        "data": {},
    }


def test_job_without_token_is_skipped(client: TestClient, stub_sender):
    response = client.post(
        EVENTS_URL,
        json={"collection": "notification_jobs", "fields": {"title": "Hi"}},
    )

    assert response.status_code == 200
    assert response.json()["data"]["outcome"] == "skipped"
    assert stub_sender.sent == []


def test_send_failure_still_succeeds(client: TestClient, stub_sender):
    failing = AsyncMock(
        side_effect=PushSendError("Service unavailable", SendFailureKind.TRANSPORT_ERROR)
    )

    with patch.object(stub_sender, "send", failing):
        response = client.post(
            EVENTS_URL,
            json={"collection": "notification_jobs", "fields": {"token": "abc"}},
        )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["outcome"] == "failed"
    assert data["error_kind"] == "transport_error"
    assert failing.await_count == 1


def test_unknown_collection_is_not_found(client: TestClient):
    response = client.post(
        EVENTS_URL, json={"collection": "orders", "fields": {"token": "abc"}}
    )

    assert response.status_code == 404
    data = response.json()
    assert data["ok"] is False
    assert data["error"]["code"] == 404
    assert data["error"]["details"] == {"collection": "orders"}


def test_invalid_event_body(client: TestClient):
    response = client.post(EVENTS_URL, json={"fields": {"token": "abc"}})

    assert response.status_code == 422
    data = response.json()
    assert data["ok"] is False
    assert data["error"]["message"] == "Request validation failed"
    assert any("collection" in err["loc"] for err in data["error"]["details"]["errors"])
