"""Tests for job to push message dispatch"""

from unittest.mock import AsyncMock

import pytest
from structlog.testing import capture_logs

from dispatcher.v1.core.exceptions import NotFoundError, PushSendError, SendFailureKind
from dispatcher.v1.jobs.dispatch import build_message, dispatch, handle_document_created
from dispatcher.v1.jobs.schemas import DispatchOutcome, NotificationJob


def _events(logs, event):
    return [log for log in logs if log["event"] == event]


class TestBuildMessage:
    """OutboundMessage mapping"""

    def test_copies_fields(self):
        job = NotificationJob(token="abc", title="Hi", body="There", data={"k": "v"})

        message = build_message(job)

        assert message.target == "abc"
        assert message.notification.title == "Hi"
        assert message.notification.body == "There"
        assert message.data == {"k": "v"}

    def test_absent_title_and_body_stay_absent(self):
        message = build_message(NotificationJob(token="xyz"))

        assert message.notification.title is None
        assert message.notification.body is None
        assert message.data == {}

    def test_empty_strings_pass_through(self):
        message = build_message(NotificationJob(token="t", title="", body=""))

        assert message.notification.title == ""
        assert message.notification.body == ""

    def test_token_is_not_modified(self):
        token = "  fcm:APA91b-token/with+odd=chars  "

        assert build_message(NotificationJob(token=token)).target == token


class TestDispatch:
    """dispatch() outcomes and logging"""

    @pytest.mark.asyncio
    async def test_sends_one_message(self, mock_sender):
        """A job with a token produces exactly one send to that token."""
        job = NotificationJob(token="abc", title="Hi", body="There")

        with capture_logs() as logs:
            result = await dispatch(job, mock_sender)

        mock_sender.send.assert_awaited_once()
        sent = mock_sender.send.await_args.args[0]
        assert sent.model_dump() == {
            "target": "abc",
            "notification": {"title": "Hi", "body": "There"},
            "data": {},
        }

        assert result.outcome == DispatchOutcome.SENT
        assert result.target == "abc"
        assert result.message_id == "projects/demo/messages/1"

        [line] = _events(logs, "Notification sent")
        assert line["token"] == "abc"
        assert line["title"] == "Hi"
        assert line["log_level"] == "info"

    @pytest.mark.asyncio
    async def test_missing_token_skips(self, mock_sender):
        """No token: nothing is sent and the call completes normally."""
        job = NotificationJob(title="Hi", body="There")

        with capture_logs() as logs:
            result = await dispatch(job, mock_sender)

        mock_sender.send.assert_not_awaited()
        assert result.outcome == DispatchOutcome.SKIPPED
        assert result.target is None
        assert len(_events(logs, "No push token provided, skipping job")) == 1
        assert not any(log["log_level"] == "error" for log in logs)

    @pytest.mark.asyncio
    async def test_empty_token_skips(self, mock_sender):
        result = await dispatch(NotificationJob(token="", title="Hi"), mock_sender)

        mock_sender.send.assert_not_awaited()
        assert result.outcome == DispatchOutcome.SKIPPED

    @pytest.mark.asyncio
    async def test_data_without_title_or_body(self, mock_sender):
        job = NotificationJob(token="xyz", data={"orderId": "42"})

        await dispatch(job, mock_sender)

        sent = mock_sender.send.await_args.args[0]
        assert sent.target == "xyz"
        assert sent.notification.title is None
        assert sent.notification.body is None
        assert sent.data == {"orderId": "42"}

    @pytest.mark.asyncio
    async def test_send_failure_is_logged_not_raised(self, mock_sender):
        """A provider error ends the dispatch normally, with no retry."""
        mock_sender.send = AsyncMock(
            side_effect=PushSendError(
                "Requested entity was not found.", SendFailureKind.UNREGISTERED_TOKEN
            )
        )
        job = NotificationJob(token="stale", title="Hi")

        with capture_logs() as logs:
            result = await dispatch(job, mock_sender)

        assert mock_sender.send.await_count == 1
        assert result.outcome == DispatchOutcome.FAILED
        assert result.target == "stale"
        assert result.error_kind == SendFailureKind.UNREGISTERED_TOKEN
        assert result.error == "Requested entity was not found."

        [line] = _events(logs, "Error sending notification")
        assert line["log_level"] == "error"
        assert line["error_kind"] == "unregistered_token"
        assert line["token"] == "stale"

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_absorbed(self, mock_sender):
        mock_sender.send = AsyncMock(side_effect=RuntimeError("socket closed"))

        result = await dispatch(NotificationJob(token="abc"), mock_sender)

        assert mock_sender.send.await_count == 1
        assert result.outcome == DispatchOutcome.FAILED
        assert result.error_kind == SendFailureKind.UNKNOWN
        assert result.error == "socket closed"


class TestHandleDocumentCreated:
    """Routing of created documents by collection"""

    @pytest.mark.asyncio
    async def test_routes_to_registered_collection(self, stub_sender):
        result = await handle_document_created(
            "notification_jobs", {"token": "abc", "title": "Hi", "body": "There"}
        )

        assert result.outcome == DispatchOutcome.SENT
        assert result.message_id.startswith("stub-")
        assert [m.target for m in stub_sender.sent] == ["abc"]

    @pytest.mark.asyncio
    async def test_empty_snapshot_is_skipped(self, stub_sender):
        result = await handle_document_created("notification_jobs", None)

        assert result.outcome == DispatchOutcome.SKIPPED
        assert stub_sender.sent == []

    @pytest.mark.asyncio
    async def test_unknown_collection(self):
        with pytest.raises(NotFoundError, match="No job handler registered"):
            await handle_document_created("orders", {"token": "abc"})
