"""Facebook webhook endpoints.

This module handles Facebook Messenger webhook verification and event
delivery. Event processing is scheduled as background work so Facebook gets
its acknowledgement immediately; failures during processing are logged and
never surfaced to the caller.
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Request, Response
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from src.config import Settings, get_settings
from src.constants import EVENT_RECEIVED, PAGE_OBJECT, WEBHOOK_SUBSCRIBE_MODE
from src.models.messenger import (
    MessengerEntry,
    MessengerMessageIn,
    MessengerWebhookPayload,
)
from src.models.result_models import ProcessResult
from src.services.message_processor import MessageProcessor, get_message_processor

logger = logging.getLogger(__name__)
router = APIRouter()


def provide_message_processor(
    settings: Settings = Depends(get_settings),
) -> MessageProcessor:
    """FastAPI dependency building the processor from the current settings."""
    return get_message_processor(settings)


@router.get("")
async def verify_webhook(
    request: Request, settings: Settings = Depends(get_settings)
):
    """Facebook webhook verification endpoint."""
    mode = request.query_params.get("hub.mode")
    token = request.query_params.get("hub.verify_token")
    challenge = request.query_params.get("hub.challenge")

    if mode == WEBHOOK_SUBSCRIBE_MODE and token == settings.verify_token:
        logger.info("WEBHOOK_VERIFIED")
        return PlainTextResponse(challenge or "")

    logger.warning("Webhook verification failed (mode=%s)", mode)
    return Response(status_code=403)


@router.post("")
async def handle_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    processor: MessageProcessor = Depends(provide_message_processor),
):
    """Handle incoming Facebook Messenger webhook events."""
    try:
        body = await request.json()
    except ValueError:
        logger.warning("Webhook body is not valid JSON")
        return Response(status_code=404)

    try:
        payload = MessengerWebhookPayload.model_validate(body)
    except ValidationError as e:
        logger.warning("Malformed webhook body: %s", e)
        return Response(status_code=404)

    if payload.object != PAGE_OBJECT:
        return Response(status_code=404)

    for raw_entry in payload.entry:
        # Only the first messaging event of each entry is handled
        try:
            event = MessengerEntry.model_validate(raw_entry).first_event()
        except ValidationError as e:
            logger.warning("Skipping malformed webhook entry: %s", e)
            continue

        if event is None or event.message is None:
            continue

        background_tasks.add_task(
            process_message,
            sender_id=event.sender_id,
            message=event.message,
            processor=processor,
        )

    return PlainTextResponse(EVENT_RECEIVED)


async def process_message(
    sender_id: str,
    message: MessengerMessageIn,
    *,
    processor: MessageProcessor,
) -> ProcessResult | None:
    """Process an incoming message after the webhook has been acknowledged.

    Args:
        sender_id: Facebook user ID (PSID) who sent the message
        message: The incoming message
        processor: Message processor (injected by the webhook route)

    Returns:
        The processor's result, or None if processing raised
    """
    try:
        return await processor.process(sender_id, message)
    except Exception as e:
        logger.error("Error processing message: %s", e, exc_info=True)
        return None
