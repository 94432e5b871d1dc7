"""Send messages to the Facebook Messenger Send API."""

import time
from typing import Any

import httpx
import logfire

from src.config import Settings
from src.constants import LOGGED_RESPONSE_BODY_CHARS
from src.models.messenger import OutboundMessage
from src.models.result_models import CallOutcome, SendResult


async def send_message(
    settings: Settings,
    recipient_id: str,
    message: dict[str, Any],
) -> SendResult:
    """
    Send a message payload via the Messenger Send API.

    The payload is passed through unmodified. Failures are logged and
    reported in the returned SendResult; nothing is raised and nothing is
    retried.

    Args:
        settings: Application settings (API root, page token, timeout)
        recipient_id: Facebook user ID (PSID) to send message to
        message: Messenger message payload, e.g. {"text": "..."}

    Returns:
        SendResult describing the outcome
    """
    start_time = time.time()

    logfire.info(
        "Sending Facebook message",
        recipient_id=recipient_id,
        message_keys=sorted(message),
    )

    params = {"access_token": settings.page_access_token}
    body = OutboundMessage.to(recipient_id, message).model_dump()

    try:
        async with httpx.AsyncClient(
            timeout=settings.facebook_api_timeout_seconds
        ) as client:
            response = await client.post(
                settings.facebook_api_root, params=params, json=body
            )
            elapsed = time.time() - start_time
            response.raise_for_status()
    except httpx.HTTPStatusError as e:
        logfire.error(
            "Facebook send request failed",
            recipient_id=recipient_id,
            status_code=e.response.status_code,
            response_body=e.response.text[:LOGGED_RESPONSE_BODY_CHARS],
            response_time_ms=elapsed * 1000,
        )
        return SendResult(
            outcome=CallOutcome.HTTP_STATUS_ERROR,
            status_code=e.response.status_code,
            error=str(e),
        )
    except httpx.RequestError as e:
        elapsed = time.time() - start_time
        logfire.error(
            "Facebook send request failed",
            recipient_id=recipient_id,
            error=str(e),
            error_type=type(e).__name__,
            response_time_ms=elapsed * 1000,
        )
        return SendResult(outcome=CallOutcome.TRANSPORT_ERROR, error=str(e))

    message_id = None
    try:
        data = response.json()
    except ValueError:
        data = None
    if isinstance(data, dict):
        message_id = data.get("message_id")

    logfire.info(
        "Facebook message sent successfully",
        recipient_id=recipient_id,
        status_code=response.status_code,
        message_id=message_id,
        response_time_ms=elapsed * 1000,
    )
    return SendResult(
        outcome=CallOutcome.DELIVERED,
        status_code=response.status_code,
        message_id=message_id,
    )
