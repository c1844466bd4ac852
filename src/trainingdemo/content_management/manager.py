"""
Content display manager.

Drives every registered part driver for a content item and resolves the
resulting shapes into zones using the placement rules.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel

from trainingdemo.content_management.binding import UpdateModel
from trainingdemo.content_management.display import (
    BuildEditorContext,
    FieldError,
    PartRenderer,
    ShapeResult,
)
from trainingdemo.content_management.item import ContentItem
from trainingdemo.content_management.placement import HIDDEN, PlacementRules, parse_location
from trainingdemo.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

Zones = Dict[str, List[Dict[str, Any]]]


@dataclass
class EditorResult:
    zones: Zones
    errors: List[FieldError] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.errors


def _dump_model(model: Any) -> Any:
    if isinstance(model, BaseModel):
        return model.model_dump(mode="json", by_alias=True)
    return model


class ContentDisplayManager:
    def __init__(self, drivers: Sequence[PartRenderer], placement: PlacementRules):
        self.drivers = list(drivers)
        self.placement = placement

    def _drivers_for(self, item: ContentItem):
        for driver in self.drivers:
            part = item.get(driver.part_type)
            if part is not None:
                yield driver, part

    def _place(self, zones: Zones, item: ContentItem, shape: ShapeResult, display_type: str) -> None:
        location = (
            self.placement.resolve(
                shape.shape_type,
                content_type=item.content_type,
                display_type=display_type,
                differentiator=shape.differentiator,
            )
            or shape.location
        )
        if not location or location == HIDDEN:
            logger.debug(
                f"No placement for shape {shape.shape_type} ({item.content_type}/{display_type})"
            )
            return
        zone, position = parse_location(location)
        zones.setdefault(zone, []).append(
            {
                "shape": shape.shape_type,
                "position": position,
                "prefix": shape.prefix,
                "model": _dump_model(shape.model),
            }
        )

    @staticmethod
    def _ordered(zones: Zones) -> Zones:
        def key(entry: Dict[str, Any]):
            position = entry["position"]
            try:
                return (0, float(position), "")
            except ValueError:
                return (1, 0.0, position)

        return {zone: sorted(entries, key=key) for zone, entries in zones.items()}

    def _check_prefixes(self, item: ContentItem) -> None:
        counts = Counter(driver.prefix for driver, _ in self._drivers_for(item))
        duplicates = sorted(prefix for prefix, count in counts.items() if count > 1)
        if duplicates:
            raise ConfigurationError(
                f"Duplicate editor prefixes for content item {item.id}: {duplicates}",
                config_key="prefix",
            )

    def build_display(self, item: ContentItem, display_type: str = "Detail") -> Zones:
        zones: Zones = {}
        for driver, part in self._drivers_for(item):
            self._place(zones, item, driver.render_view(part), display_type)
        return self._ordered(zones)

    def build_editor(self, item: ContentItem, context: Optional[BuildEditorContext] = None) -> Zones:
        self._check_prefixes(item)
        context = context or BuildEditorContext(content_item=item)
        zones: Zones = {}
        for driver, part in self._drivers_for(item):
            self._place(zones, item, driver.render_edit(part, context), "Edit")
        return self._ordered(zones)

    def update_editor(
        self,
        item: ContentItem,
        updater: UpdateModel,
        context: Optional[BuildEditorContext] = None,
    ) -> EditorResult:
        """
        Run every driver's update against the same updater.

        Parts only change when their own update succeeds; persisting the item
        is left to the caller and should only happen when the result succeeded.
        """
        self._check_prefixes(item)
        context = context or BuildEditorContext(content_item=item)
        zones: Zones = {}
        errors: List[FieldError] = []
        for driver, part in self._drivers_for(item):
            result = driver.update(part, updater, context)
            errors.extend(result.errors)
            self._place(zones, item, result.descriptor, "Edit")
        return EditorResult(zones=self._ordered(zones), errors=errors)
