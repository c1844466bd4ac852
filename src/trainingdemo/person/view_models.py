from __future__ import annotations

from datetime import datetime
from typing import Any, ClassVar, FrozenSet, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_pascal

from trainingdemo.content_management.clock import as_utc
from trainingdemo.person.models import Handedness, PersonPart, coerce_handedness


class PersonPartViewModel(BaseModel):
    """
    Editor model of PersonPart.

    Lives for one edit round-trip. Form fields bind by their PascalCase alias
    ("PersonPart.BirthDateUtc"); `person_part` points back at the edited part
    and is never bound from the request.
    """

    model_config = ConfigDict(
        alias_generator=to_pascal,
        populate_by_name=True,
    )

    name: str = ""
    birth_date_utc: Optional[datetime] = None
    handedness: Optional[Handedness] = None

    person_part: Optional[PersonPart] = Field(default=None, exclude=True)

    BIND_NEVER: ClassVar[FrozenSet[str]] = frozenset({"person_part"})

    @field_validator("name", mode="before")
    @classmethod
    def _name(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("birth_date_utc")
    @classmethod
    def _utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    @field_validator("birth_date_utc", mode="before")
    @classmethod
    def _blank_date(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("handedness", mode="before")
    @classmethod
    def _handedness(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return coerce_handedness(value)
