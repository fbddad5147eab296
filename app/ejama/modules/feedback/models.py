from __future__ import annotations

from pydantic import ConfigDict, Field

from app.ejama.records import Record


class Feedback(Record):
    # Screens send extra fields (device, screen name...); keep them.
    model_config = ConfigDict(extra="allow")

    message: str
    rating: int | None = Field(default=None, ge=1, le=5)
    category: str | None = None
    email: str | None = None
    timestamp: str
