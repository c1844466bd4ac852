from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import Field, field_validator

from trainingdemo.content_management.clock import as_utc
from trainingdemo.content_management.item import ContentPart


class Handedness(str, Enum):
    left = "left"
    right = "right"
    ambidextrous = "ambidextrous"


def coerce_handedness(value: Any) -> Any:
    """Accept enum names case-insensitively ("Right", "LEFT")."""
    if isinstance(value, str) and not isinstance(value, Handedness):
        return value.strip().lower()
    return value


class PersonPart(ContentPart):
    """A person attached to a content item."""

    name: Optional[str] = Field(default=None, description="Full name")
    birth_date_utc: Optional[datetime] = Field(default=None, description="Date of birth (UTC)")
    handedness: Handedness = Field(default=Handedness.right)

    @field_validator("birth_date_utc")
    @classmethod
    def _utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    @field_validator("handedness", mode="before")
    @classmethod
    def _handedness(cls, value: Any) -> Any:
        return coerce_handedness(value)
