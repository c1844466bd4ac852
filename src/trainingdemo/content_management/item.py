from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel

TPart = TypeVar("TPart", bound="ContentPart")


class ContentPart(BaseModel):
    """
    Typed data attached to a content item.

    Subclasses declare the part fields; the part name is the class name.
    """

    @classmethod
    def part_name(cls) -> str:
        return cls.__name__


@dataclass
class ContentItem:
    """Generic addressable unit that parts are welded onto, one part per part name."""

    content_type: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    display_text: Optional[str] = None
    parts: Dict[str, ContentPart] = field(default_factory=dict)

    def weld(self, part: ContentPart) -> ContentPart:
        name = part.part_name()
        existing = self.parts.get(name)
        if existing is not None and existing is not part:
            raise ValueError(f"Content item {self.id} already has a {name}")
        self.parts[name] = part
        return part

    def get(self, part_type: Type[TPart]) -> Optional[TPart]:
        part = self.parts.get(part_type.part_name())
        return part if isinstance(part, part_type) else None

    def dump_parts(self) -> Dict[str, Dict[str, Any]]:
        return {name: part.model_dump(mode="json") for name, part in self.parts.items()}
