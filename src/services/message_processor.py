"""Message processing orchestration service.

The webhook handler focuses on HTTP concerns while MessageProcessor handles
what happens to a single inbound message:
- Echoing the text back to the sender
- Matching the text against the playground moments
- Fetching a matched moment from Direqt (which relays it to the sender)
"""

from __future__ import annotations

import re

import logfire

from src.config import Settings
from src.constants import ECHO_TEMPLATE, EXAMPLE_MOMENTS, MOMENT_ID_PREFIX
from src.models.messenger import MessengerMessageIn
from src.models.result_models import ProcessResult
from src.services.direqt_service import DireqtService, get_direqt_service
from src.services.messaging_protocol import MessagingService, get_messaging_service

# Only ASCII letters, digits and underscore are word characters. Each other
# character becomes its own hyphen; runs are not collapsed
_NON_WORD = re.compile(r"\W", re.ASCII)


def normalize_text(text: str) -> str:
    """Lowercase text and replace every non-word character with a hyphen.

    >>> normalize_text("Rich Card")
    'rich-card'
    >>> normalize_text("Rich Card!")
    'rich-card-'
    """
    return _NON_WORD.sub("-", text.lower())


def match_moment(text: str) -> str | None:
    """Return the Direqt moment id for a recognized keyword, or None."""
    normalized = normalize_text(text)
    if normalized in EXAMPLE_MOMENTS:
        return MOMENT_ID_PREFIX + normalized
    return None


class MessageProcessor:
    """Handle one inbound Messenger message.

    The echo reply and the moment fetch are independent side effects: a
    message such as "media" produces both.

    Example:
        >>> messaging = MockMessagingService()
        >>> processor = MessageProcessor(
        ...     messaging=messaging,
        ...     direqt=DireqtService(settings, messaging),
        ... )
        >>> await processor.process("user456", MessengerMessageIn(text="Hi"))
    """

    def __init__(self, messaging: MessagingService, direqt: DireqtService):
        self._messaging = messaging
        self._direqt = direqt

    async def process(
        self, sender_id: str, message: MessengerMessageIn
    ) -> ProcessResult:
        """Echo the message and fetch a moment if the text is a keyword.

        Args:
            sender_id: Facebook user ID (PSID) who sent the message
            message: The incoming message

        Returns:
            ProcessResult; empty when the message has no text
        """
        if not message.text:
            logfire.info("Ignoring message without text", sender_id=sender_id)
            return ProcessResult()

        echo = await self._messaging.send_message(
            sender_id, {"text": ECHO_TEMPLATE.format(text=message.text)}
        )

        moment_id = match_moment(message.text)
        if moment_id is None:
            return ProcessResult(echo=echo)

        logfire.info("Matched moment keyword", sender_id=sender_id, moment_id=moment_id)
        fetch = await self._direqt.fetch_moment(sender_id, moment_id)
        return ProcessResult(echo=echo, moment_id=moment_id, fetch=fetch)


def get_message_processor(settings: Settings) -> MessageProcessor:
    """Build a MessageProcessor wired to the real Facebook and Direqt services."""
    messaging = get_messaging_service(settings)
    return MessageProcessor(
        messaging=messaging,
        direqt=get_direqt_service(settings, messaging),
    )
