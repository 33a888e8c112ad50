"""Tests for the Firestore trigger entry point"""

from unittest.mock import Mock, patch

import pytest

from dispatcher.config.settings import PushProvider
from dispatcher.triggers import job_handler, process_created_document, process_event
from dispatcher.v1.jobs.schemas import DispatchOutcome


@pytest.fixture
def fcm_send():
    """Patch the Admin SDK so trigger dispatches stop at messaging.send."""
    with (
        patch("dispatcher.v1.push.senders.initialize_firebase", return_value=Mock()),
        patch(
            "firebase_admin.messaging.send",
            return_value="projects/demo/messages/1",
        ) as send,
    ):
        yield send


def _event(doc_id, fields):
    event = Mock()
    event.params = {"docId": doc_id}
    if fields is None:
        event.data = None
    else:
        event.data.to_dict.return_value = fields
    return event


def test_trigger_always_uses_fcm():
    assert job_handler.provider == PushProvider.FCM


def test_created_document_is_sent_through_fcm(fcm_send, stub_sender):
    result = process_created_document(
        "job-1", {"token": "abc", "title": "Hi", "body": "There"}
    )

    assert result.outcome == DispatchOutcome.SENT
    assert result.message_id == "projects/demo/messages/1"
    fcm_message = fcm_send.call_args.args[0]
    assert fcm_message.token == "abc"
    assert fcm_message.notification.title == "Hi"
    assert stub_sender.sent == []


def test_document_without_token_never_reaches_fcm(fcm_send):
    result = process_created_document("job-2", {"title": "Hi"})

    assert result.outcome == DispatchOutcome.SKIPPED
    fcm_send.assert_not_called()


def test_document_without_snapshot_is_ignored(fcm_send):
    assert process_created_document("job-3", None) is None
    fcm_send.assert_not_called()


class TestProcessEvent:
    """Firestore event unwrapping"""

    def test_passes_doc_id_and_snapshot(self):
        event = _event("job-4", {"token": "abc"})

        with patch("dispatcher.triggers.process_created_document") as process:
            process_event(event)

        process.assert_called_once_with("job-4", {"token": "abc"})

    def test_missing_document_data(self, fcm_send):
        assert process_event(_event("job-5", None)) is None
        fcm_send.assert_not_called()
