"""Error details domain model."""

from pydantic import BaseModel, ConfigDict


class ErrorDetails(BaseModel):
    """Why a journey could not be fetched, including the upstream HTTP status if any."""

    model_config = ConfigDict(frozen=True)

    status_code: int | None = None
    reason: str
