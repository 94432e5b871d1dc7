"""Fetch pre-authored moments from the Direqt content API."""

import json
import time

import httpx
import logfire
from pydantic import ValidationError

from src.config import Settings
from src.constants import (
    DIREQT_FETCH_PATH,
    DIREQT_SUCCESS_STATUS_CODES,
    LOGGED_RESPONSE_BODY_CHARS,
)
from src.models.direqt_models import MomentFetchRequest, MomentFetchResponse
from src.models.result_models import CallOutcome, FetchResult
from src.services.messaging_protocol import MessagingService


class DireqtService:
    """Client for Direqt's /fetch endpoint.

    A fetched payload is relayed to the subscriber through the injected
    MessagingService. Each fetch ends in exactly one terminal outcome:
    transport failure, HTTP error, empty payload, invalid payload, or
    delivery via the messaging service. Nothing is retried.
    """

    def __init__(self, settings: Settings, messaging: MessagingService):
        self._settings = settings
        self._messaging = messaging

    @property
    def fetch_url(self) -> str:
        return self._settings.direqt_api_root.rstrip("/") + DIREQT_FETCH_PATH

    async def fetch_moment(self, sender_id: str, moment_id: str) -> FetchResult:
        """
        Fetch a moment for a subscriber and send it if content came back.

        Args:
            sender_id: Messenger PSID, used as the Direqt subscriber id
            moment_id: Direqt moment identifier, e.g. "fbm-media"

        Returns:
            FetchResult describing the terminal outcome
        """
        start_time = time.time()
        request_body = MomentFetchRequest(moment=moment_id, subscriber=sender_id)

        logfire.info(
            "Fetching Direqt moment",
            moment_id=moment_id,
            subscriber=sender_id,
            authenticated=self._settings.direqt_auth is not None,
        )

        try:
            async with httpx.AsyncClient(
                timeout=self._settings.direqt_api_timeout_seconds
            ) as client:
                response = await client.post(
                    self.fetch_url,
                    params={"key": self._settings.direqt_api_key},
                    json=request_body.model_dump(),
                    auth=self._settings.direqt_auth,
                )
        except httpx.RequestError as e:
            logfire.error(
                "Direqt fetch for moment failed",
                moment_id=moment_id,
                error=str(e),
                error_type=type(e).__name__,
                response_time_ms=(time.time() - start_time) * 1000,
            )
            return FetchResult(
                outcome=CallOutcome.TRANSPORT_ERROR, moment_id=moment_id, error=str(e)
            )

        elapsed = time.time() - start_time

        if response.status_code not in DIREQT_SUCCESS_STATUS_CODES:
            logfire.error(
                "Direqt fetch for moment failed",
                moment_id=moment_id,
                status_code=response.status_code,
                response_body=response.text[:LOGGED_RESPONSE_BODY_CHARS],
                response_time_ms=elapsed * 1000,
            )
            return FetchResult(
                outcome=CallOutcome.HTTP_STATUS_ERROR,
                moment_id=moment_id,
                status_code=response.status_code,
            )

        payload_text = self._extract_payload(response)
        if not payload_text:
            logfire.info(
                "Direqt fetch for moment was empty",
                moment_id=moment_id,
                status_code=response.status_code,
                response_time_ms=elapsed * 1000,
            )
            return FetchResult(
                outcome=CallOutcome.EMPTY_RESULT,
                moment_id=moment_id,
                status_code=response.status_code,
            )

        try:
            payload = json.loads(payload_text)
        except json.JSONDecodeError as e:
            payload = None
            error = str(e)
        else:
            error = "payload is not a JSON object"
        if not isinstance(payload, dict):
            logfire.error(
                "Direqt fetch for moment returned an invalid payload",
                moment_id=moment_id,
                error=error,
                payload=payload_text[:LOGGED_RESPONSE_BODY_CHARS],
            )
            return FetchResult(
                outcome=CallOutcome.INVALID_PAYLOAD,
                moment_id=moment_id,
                status_code=response.status_code,
                error=error,
            )

        logfire.info(
            "Direqt fetch for moment received payload",
            moment_id=moment_id,
            status_code=response.status_code,
            response_time_ms=elapsed * 1000,
        )
        send_result = await self._messaging.send_message(sender_id, payload)
        return FetchResult(
            outcome=CallOutcome.DELIVERED,
            moment_id=moment_id,
            status_code=response.status_code,
            payload=payload,
            send_result=send_result,
        )

    @staticmethod
    def _extract_payload(response: httpx.Response) -> str | None:
        """Return the JSON-encoded payload string from a fetch response, if any."""
        if not response.content:
            return None
        try:
            data = response.json()
        except ValueError:
            return None
        if not isinstance(data, dict):
            return None
        try:
            return MomentFetchResponse.model_validate(data).payload
        except ValidationError:
            return None


def get_direqt_service(
    settings: Settings, messaging: MessagingService
) -> DireqtService:
    """Factory function to get a DireqtService."""
    return DireqtService(settings=settings, messaging=messaging)
