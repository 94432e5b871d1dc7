"""Tests for Pydantic models."""

import pytest
from hypothesis import given, strategies as st
from pydantic import ValidationError

from src.models.direqt_models import MomentFetchRequest, MomentFetchResponse
from src.models.messenger import (
    MessagingEvent,
    MessengerEntry,
    MessengerWebhookPayload,
    OutboundMessage,
)
from src.models.result_models import CallOutcome, FetchResult, SendResult


class TestMessengerModels:
    """Test Facebook Messenger models."""

    def test_payload_defaults(self):
        payload = MessengerWebhookPayload.model_validate({})
        assert payload.object is None
        assert payload.entry == []

    def test_payload_rejects_non_list_entry(self):
        with pytest.raises(ValidationError):
            MessengerWebhookPayload.model_validate({"object": "page", "entry": "x"})

    def test_entry_without_messaging_has_no_event(self):
        assert MessengerEntry.model_validate({"id": "page-1"}).first_event() is None
        assert MessengerEntry(messaging=[]).first_event() is None

    def test_entry_uses_only_first_event(self):
        entry = MessengerEntry(
            messaging=[
                {"sender": {"id": "first"}, "message": {"text": "one"}},
                {"sender": {"id": "second"}, "message": {"text": "two"}},
            ]
        )
        event = entry.first_event()
        assert event.sender_id == "first"
        assert event.message.text == "one"

    def test_event_without_message(self):
        event = MessagingEvent.model_validate(
            {"sender": {"id": "u"}, "postback": {"payload": "GET_STARTED"}}
        )
        assert event.message is None

    def test_event_requires_sender(self):
        with pytest.raises(ValidationError):
            MessagingEvent.model_validate({"message": {"text": "hi"}})

    @given(
        recipient_id=st.text(min_size=1, max_size=100),
        text=st.text(max_size=500),
    )
    def test_outbound_message_properties(self, recipient_id: str, text: str):
        """Property: the payload is carried through untouched."""
        outbound = OutboundMessage.to(recipient_id, {"text": text})
        assert outbound.model_dump() == {
            "recipient": {"id": recipient_id},
            "message": {"text": text},
        }


class TestDireqtModels:
    def test_fetch_request_defaults(self):
        request = MomentFetchRequest(moment="fbm-text", subscriber="user-1")
        assert request.model_dump() == {
            "format": "FBM",
            "moment": "fbm-text",
            "subscriber": "user-1",
            "targeting": '{"language":"en"}',
        }

    def test_fetch_response_ignores_unknown_fields(self):
        response = MomentFetchResponse.model_validate({"payload": "{}", "extra": 1})
        assert response.payload == "{}"


class TestResultModels:
    def test_send_result_ok(self):
        assert SendResult(outcome=CallOutcome.DELIVERED).ok
        assert not SendResult(outcome=CallOutcome.TRANSPORT_ERROR).ok

    def test_fetch_result_ok(self):
        assert FetchResult(outcome=CallOutcome.DELIVERED, moment_id="fbm-text").ok
        assert not FetchResult(outcome=CallOutcome.EMPTY_RESULT, moment_id="m").ok

    def test_outcome_values(self):
        assert {o.value for o in CallOutcome} == {
            "delivered",
            "transport_error",
            "http_status_error",
            "empty_result",
            "invalid_payload",
        }
