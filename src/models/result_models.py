"""Outcome models for outbound calls.

Outbound calls never raise into the webhook. Instead the sender, the Direqt
client and the message processor return these models so callers and tests
can see what happened without inspecting logs.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel


class CallOutcome(str, Enum):
    """Terminal state of a single outbound call."""

    DELIVERED = "delivered"
    TRANSPORT_ERROR = "transport_error"
    HTTP_STATUS_ERROR = "http_status_error"
    EMPTY_RESULT = "empty_result"
    INVALID_PAYLOAD = "invalid_payload"


class SendResult(BaseModel):
    """Result of a Messenger Send API call."""

    outcome: CallOutcome
    status_code: int | None = None
    message_id: str | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is CallOutcome.DELIVERED


class FetchResult(BaseModel):
    """Result of a Direqt moment fetch."""

    outcome: CallOutcome
    moment_id: str
    status_code: int | None = None
    payload: dict[str, Any] | None = None
    error: str | None = None
    send_result: SendResult | None = None

    @property
    def ok(self) -> bool:
        return self.outcome is CallOutcome.DELIVERED


class ProcessResult(BaseModel):
    """What the message processor did for one inbound message."""

    echo: SendResult | None = None
    moment_id: str | None = None
    fetch: FetchResult | None = None
