"""Messaging abstraction protocols for decoupling from the Facebook API.

This module provides a Protocol-based abstraction for the outbound sender,
allowing the application to:
- Mock messaging in tests without complex httpx mocking
- Support dependency injection for the processor and the Direqt client
"""

from typing import Any, Protocol

from src.config import Settings
from src.models.result_models import CallOutcome, SendResult


class MessagingService(Protocol):
    """Protocol for sending message payloads to a subscriber."""

    async def send_message(
        self,
        recipient_id: str,
        message: dict[str, Any],
    ) -> SendResult:
        """Send a message payload to recipient.

        Args:
            recipient_id: Platform-specific user identifier
            message: Opaque message payload

        Returns:
            SendResult; implementations never raise on delivery failure
        """
        ...


class FacebookMessagingService:
    """Facebook Messenger implementation of MessagingService.

    Example:
        >>> service = FacebookMessagingService(settings)
        >>> result = await service.send_message("user123", {"text": "Hello!"})
        >>> result.ok
        True
    """

    def __init__(self, settings: Settings):
        self._settings = settings

    async def send_message(
        self, recipient_id: str, message: dict[str, Any]
    ) -> SendResult:
        """Send message via Facebook Messenger."""
        from src.services.facebook_service import send_message

        return await send_message(
            settings=self._settings,
            recipient_id=recipient_id,
            message=message,
        )


class MockMessagingService:
    """Mock implementation for testing.

    Example:
        >>> service = MockMessagingService()
        >>> await service.send_message("user123", {"text": "Test message"})
        >>> service.sent_messages
        [('user123', {'text': 'Test message'})]
    """

    def __init__(self, should_fail_send: bool = False):
        """Initialize mock service.

        Args:
            should_fail_send: Whether send_message should report a failure
        """
        self._should_fail_send = should_fail_send
        self.sent_messages: list[tuple[str, dict[str, Any]]] = []

    async def send_message(
        self, recipient_id: str, message: dict[str, Any]
    ) -> SendResult:
        """Record sent message and return configured result."""
        self.sent_messages.append((recipient_id, message))
        if self._should_fail_send:
            return SendResult(outcome=CallOutcome.HTTP_STATUS_ERROR, status_code=500)
        return SendResult(outcome=CallOutcome.DELIVERED, status_code=200)


def get_messaging_service(settings: Settings) -> FacebookMessagingService:
    """Factory function to get a MessagingService implementation."""
    return FacebookMessagingService(settings=settings)
