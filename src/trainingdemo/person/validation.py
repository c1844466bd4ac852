"""
PersonPart editor validation.

Every rule runs on every call so the editor shows all problems at once.
"""

from __future__ import annotations

from datetime import datetime
from typing import Callable, Iterable, List, Optional

from trainingdemo.content_management.clock import as_utc, utcnow
from trainingdemo.content_management.display import FieldError
from trainingdemo.person.models import Handedness
from trainingdemo.person.view_models import PersonPartViewModel

Rule = Callable[[PersonPartViewModel, datetime], Iterable[FieldError]]


def name_required(model: PersonPartViewModel, now: datetime) -> Iterable[FieldError]:
    if not (model.name or "").strip():
        yield FieldError("name", "Name is required.")


def birth_date_in_past(model: PersonPartViewModel, now: datetime) -> Iterable[FieldError]:
    if model.birth_date_utc is None:
        yield FieldError("birth_date_utc", "Date of birth is required.")
    elif as_utc(model.birth_date_utc) > now:
        yield FieldError("birth_date_utc", "Date of birth can't be in the future.")


def handedness_known(model: PersonPartViewModel, now: datetime) -> Iterable[FieldError]:
    if not isinstance(model.handedness, Handedness):
        allowed = ", ".join(h.value for h in Handedness)
        yield FieldError("handedness", f"Handedness must be one of: {allowed}.")


RULES: List[Rule] = [name_required, birth_date_in_past, handedness_known]


def validate_person(
    model: PersonPartViewModel,
    now: Optional[datetime] = None,
    rules: Iterable[Rule] = RULES,
) -> List[FieldError]:
    """Field errors for `model`, in rule order; empty when valid."""
    now = as_utc(now) if now is not None else utcnow()
    errors: List[FieldError] = []
    for rule in rules:
        errors.extend(rule(model, now))
    return errors
