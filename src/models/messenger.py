"""Incoming/outgoing Facebook Messenger models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MessengerUser(BaseModel):
    """Sender or recipient reference (PSID or page id)."""

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)

    id: str


class MessengerMessageIn(BaseModel):
    """Incoming Facebook Messenger message."""

    model_config = ConfigDict(extra="ignore")

    mid: str | None = None
    text: str | None = None


class MessagingEvent(BaseModel):
    """Single messaging event inside a webhook entry."""

    model_config = ConfigDict(extra="ignore")

    sender: MessengerUser
    recipient: MessengerUser | None = None
    timestamp: int | None = None
    message: MessengerMessageIn | None = None

    @property
    def sender_id(self) -> str:
        return self.sender.id


class MessengerEntry(BaseModel):
    """Facebook webhook entry."""

    model_config = ConfigDict(extra="ignore")

    id: str | None = None
    time: int | None = None
    messaging: list[dict[str, Any]] = Field(default_factory=list)

    def first_event(self) -> MessagingEvent | None:
        """Return the first messaging event; later events are ignored."""
        if not self.messaging:
            return None
        return MessagingEvent.model_validate(self.messaging[0])


class MessengerWebhookPayload(BaseModel):
    """Facebook webhook payload.

    Entries stay as raw dicts so that one malformed entry can be skipped
    without rejecting the whole delivery.
    """

    model_config = ConfigDict(extra="ignore")

    object: str | None = None
    entry: list[Any] = Field(default_factory=list)


class OutboundMessage(BaseModel):
    """Body of a Send API request. The message payload is passed through as-is."""

    recipient: MessengerUser
    message: dict[str, Any]

    @classmethod
    def to(cls, recipient_id: str, message: dict[str, Any]) -> "OutboundMessage":
        return cls(recipient=MessengerUser(id=recipient_id), message=message)
