"""Direqt content API request/response models."""

from pydantic import BaseModel, ConfigDict, Field

from src.constants import DIREQT_DEFAULT_TARGETING, DIREQT_FORMAT


class MomentFetchRequest(BaseModel):
    """Body of a Direqt /fetch request."""

    format: str = DIREQT_FORMAT
    moment: str = Field(..., description="Moment identifier, e.g. fbm-media")
    subscriber: str = Field(..., description="Messenger PSID of the subscriber")
    # JSON-encoded string; may carry any non-personally-identifiable context
    targeting: str = DIREQT_DEFAULT_TARGETING


class MomentFetchResponse(BaseModel):
    """Body of a Direqt /fetch response."""

    model_config = ConfigDict(extra="ignore")

    # JSON-encoded Messenger message payload
    payload: str | None = None
