"""
Request binder.

Binds prefixed request fields ("PersonPart.Name") into a pydantic model and
records per-field failures instead of raising.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from trainingdemo.content_management.display import FieldError
from trainingdemo.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class UpdateModel:
    """
    Wraps inbound form data for one request.

    `model_state` accumulates every field error raised while binding or
    validating, in the order they were added.
    """

    def __init__(self, form: Optional[Mapping[str, Any]] = None):
        self.form: Dict[str, Any] = dict(form or {})
        self.model_state: List[FieldError] = []

    @property
    def is_valid(self) -> bool:
        return not self.model_state

    def add_model_error(self, field: str, message: str) -> None:
        self.model_state.append(FieldError(field=field, message=message))

    def errors_for(self, field: str) -> List[FieldError]:
        return [e for e in self.model_state if e.field == field]

    def try_update_model(
        self,
        model: BaseModel,
        prefix: str,
        exclude: Iterable[str] = (),
    ) -> bool:
        """
        Populate `model` from the form keys "<prefix>.<alias>".

        Fields without a submitted value keep their current value. Fields whose
        value fails to convert keep their current value and get a field error.
        """
        if not prefix:
            raise ConfigurationError("Binding requires a non-empty prefix", config_key="prefix")

        excluded = set(exclude)
        model_type = type(model)
        by_loc: Dict[str, str] = {}
        submitted: Dict[str, Any] = {}
        for name, info in model_type.model_fields.items():
            if name in excluded:
                continue
            alias = info.alias or name
            by_loc[alias] = by_loc[name] = name
            key = f"{prefix}.{alias}"
            if key in self.form:
                submitted[name] = self.form[key]

        candidate = {
            name: getattr(model, name)
            for name in model_type.model_fields
            if name not in excluded
        }
        candidate.update(submitted)

        failed: Dict[str, str] = {}
        try:
            bound = model_type.model_validate(candidate)
        except PydanticValidationError as exc:
            for error in exc.errors():
                loc = error["loc"][0] if error["loc"] else ""
                name = by_loc.get(str(loc), str(loc))
                failed.setdefault(name, error["msg"])
            for name in failed:
                candidate.pop(name, None)
            bound = model_type.model_validate(candidate)

        for name in submitted:
            if name not in failed:
                setattr(model, name, getattr(bound, name))

        for name, message in failed.items():
            self.add_model_error(name, message)
        if failed:
            logger.debug(f"Binding failed under prefix {prefix}: {sorted(failed)}")
        return not failed
