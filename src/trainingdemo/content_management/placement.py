"""
Placement rules.

A placement file maps shape types to locations, optionally narrowed by
content type, display type and differentiator:

    {
      "PersonPart": [
        {"displayType": "Detail", "place": "Content:1"},
        {"displayType": "Summary", "place": "Meta:5"}
      ]
    }
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from jsonschema import ValidationError as JSONSchemaValidationError
from jsonschema import validate

from trainingdemo.exceptions import ConfigurationError

PLACEMENT_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "additionalProperties": {
        "type": "array",
        "items": {
            "type": "object",
            "properties": {
                "place": {"type": "string", "pattern": "^[A-Za-z][A-Za-z0-9_]*(:[^:]+)?$|^-$"},
                "contentType": {"type": "array", "items": {"type": "string"}},
                "displayType": {"type": "string"},
                "differentiator": {"type": "string"},
            },
            "required": ["place"],
            "additionalProperties": False,
        },
    },
}

HIDDEN = "-"


@dataclass(frozen=True)
class PlacementRule:
    shape_type: str
    place: str
    content_types: Tuple[str, ...] = ()
    display_type: Optional[str] = None
    differentiator: Optional[str] = None

    def matches(
        self,
        content_type: Optional[str],
        display_type: Optional[str],
        differentiator: Optional[str],
    ) -> bool:
        if self.content_types and content_type not in self.content_types:
            return False
        if self.display_type and self.display_type != display_type:
            return False
        if self.differentiator and self.differentiator != differentiator:
            return False
        return True

    @property
    def specificity(self) -> int:
        return sum(
            1
            for value in (self.content_types, self.display_type, self.differentiator)
            if value
        )


def parse_location(location: str) -> Tuple[str, str]:
    """Split "Zone:Position" into its parts; the position may be empty."""
    zone, _, position = location.partition(":")
    return zone, position


class PlacementRules:
    def __init__(self, rules: Optional[List[PlacementRule]] = None):
        self._rules: Dict[str, List[PlacementRule]] = {}
        for rule in rules or []:
            self._rules.setdefault(rule.shape_type, []).append(rule)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlacementRules":
        try:
            validate(instance=data, schema=PLACEMENT_SCHEMA)
        except JSONSchemaValidationError as exc:
            raise ConfigurationError(
                f"Invalid placement rules: {exc.message}", config_key="placement"
            ) from exc
        rules = [
            PlacementRule(
                shape_type=shape_type,
                place=entry["place"],
                content_types=tuple(entry.get("contentType") or ()),
                display_type=entry.get("displayType"),
                differentiator=entry.get("differentiator"),
            )
            for shape_type, entries in data.items()
            for entry in entries
        ]
        return cls(rules)

    @classmethod
    def from_file(cls, path: Path) -> "PlacementRules":
        try:
            data = json.loads(Path(path).read_text(encoding="utf-8"))
        except FileNotFoundError as exc:
            raise ConfigurationError(
                f"Placement file not found: {path}", config_key="PLACEMENT_FILE"
            ) from exc
        except json.JSONDecodeError as exc:
            raise ConfigurationError(
                f"Placement file {path} is not valid JSON: {exc}", config_key="PLACEMENT_FILE"
            ) from exc
        return cls.from_dict(data)

    def resolve(
        self,
        shape_type: str,
        *,
        content_type: Optional[str] = None,
        display_type: Optional[str] = None,
        differentiator: Optional[str] = None,
    ) -> Optional[str]:
        """Most specific matching place for the shape, or None."""
        candidates = [
            rule
            for rule in self._rules.get(shape_type, [])
            if rule.matches(content_type, display_type, differentiator)
        ]
        if not candidates:
            return None
        return max(candidates, key=lambda r: r.specificity).place
