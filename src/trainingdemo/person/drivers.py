"""
PersonPart display driver.

- render_view: the read-only "PersonPart" shape; where it shows up is up to
  the placement rules.
- render_edit: the "PersonPart_Edit" shape with a view model mapped from
  the part, first in the Content zone.
- update: bind the request into a fresh view model, validate it, and copy
  the fields onto the part only when everything is valid.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from trainingdemo.content_management.binding import UpdateModel
from trainingdemo.content_management.clock import utcnow
from trainingdemo.content_management.display import (
    BuildEditorContext,
    ContentPartDisplayDriver,
    ShapeResult,
    UpdateResult,
)
from trainingdemo.person.models import PersonPart
from trainingdemo.person.validation import validate_person
from trainingdemo.person.view_models import PersonPartViewModel

logger = logging.getLogger(__name__)

EDITOR_LOCATION = "Content:1"


class PersonPartDisplayDriver(ContentPartDisplayDriver[PersonPart]):
    part_type = PersonPart

    def __init__(
        self,
        prefix: Optional[str] = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        super().__init__(prefix)
        self.clock = clock

    def _editor_shape(
        self,
        model_type: Callable[[], PersonPartViewModel],
        initialize: Callable[[PersonPartViewModel], None],
        context: Optional[BuildEditorContext],
    ) -> ShapeResult:
        return self.initialize(
            model_type, self.get_editor_shape_type(context), initialize
        ).with_location(EDITOR_LOCATION)

    def render_view(self, part: PersonPart) -> ShapeResult:
        return self.view(PersonPart.part_name(), part)

    def render_edit(
        self, part: PersonPart, context: Optional[BuildEditorContext] = None
    ) -> ShapeResult:
        def initialize(model: PersonPartViewModel) -> None:
            model.person_part = part
            model.name = part.name or ""
            model.birth_date_utc = part.birth_date_utc
            model.handedness = part.handedness

        return self._editor_shape(PersonPartViewModel, initialize, context)

    def update(
        self,
        part: PersonPart,
        updater: UpdateModel,
        context: Optional[BuildEditorContext] = None,
    ) -> UpdateResult:
        view_model = PersonPartViewModel()
        mark = len(updater.model_state)

        updater.try_update_model(view_model, self.prefix, exclude=PersonPartViewModel.BIND_NEVER)
        unbound = {e.field for e in updater.model_state[mark:]}
        for error in validate_person(view_model, now=self.clock()):
            if error.field not in unbound:
                updater.add_model_error(error.field, error.message)

        errors = list(updater.model_state[mark:])
        if errors:
            logger.info(
                f"PersonPart update rejected under prefix {self.prefix}: "
                f"{sorted({e.field for e in errors})}"
            )

            def keep_part(model: PersonPartViewModel) -> None:
                model.person_part = part

            descriptor = self._editor_shape(lambda: view_model, keep_part, context)
            return UpdateResult(descriptor=descriptor, errors=errors)

        part.name = view_model.name
        part.birth_date_utc = view_model.birth_date_utc
        part.handedness = view_model.handedness
        return UpdateResult(descriptor=self.render_edit(part, context))
