"""
Display descriptors and the driver base class.

A driver turns a content part into named shapes: a read-only view shape and
an editor shape. The host resolves the shapes to output using placement.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any, Callable, Generic, List, Optional, Protocol, Type, TypeVar

from trainingdemo.content_management.item import ContentItem, ContentPart
from trainingdemo.exceptions import ConfigurationError, ValidationError

TPart = TypeVar("TPart", bound=ContentPart)
TModel = TypeVar("TModel")


@dataclass(frozen=True)
class FieldError:
    """User-correctable problem on one field."""

    field: str
    message: str


@dataclass(frozen=True)
class ShapeResult:
    """Named shape (template identifier) plus the model it renders."""

    shape_type: str
    model: Any
    location: Optional[str] = None
    prefix: Optional[str] = None
    differentiator: Optional[str] = None

    def with_location(self, location: str) -> "ShapeResult":
        return dataclasses.replace(self, location=location)


@dataclass
class UpdateResult:
    descriptor: ShapeResult
    errors: List[FieldError] = field(default_factory=list)

    @property
    def succeeded(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        if self.errors:
            raise ValidationError.from_field_errors(self.errors)


@dataclass(frozen=True)
class BuildEditorContext:
    content_item: Optional[ContentItem] = None
    group_id: str = ""
    is_new: bool = False


class PartRenderer(Protocol):
    """Capability interface a host drives: view, edit, update."""

    part_type: Type[ContentPart]

    @property
    def prefix(self) -> str: ...

    def render_view(self, part: Any) -> ShapeResult: ...

    def render_edit(self, part: Any, context: Optional[BuildEditorContext] = None) -> ShapeResult: ...

    def update(self, part: Any, updater: Any, context: Optional[BuildEditorContext] = None) -> UpdateResult: ...


class ContentPartDisplayDriver(Generic[TPart]):
    """
    Base class for part drivers.

    The prefix scopes the editor's request fields; it defaults to the part
    name and must be unique among the editors shown for one content item.
    """

    part_type: Type[TPart]

    def __init__(self, prefix: Optional[str] = None):
        self._prefix = self.part_type.part_name() if prefix is None else prefix

    @property
    def prefix(self) -> str:
        if not self._prefix:
            raise ConfigurationError(
                f"{type(self).__name__} has no editor prefix", config_key="prefix"
            )
        return self._prefix

    def view(self, shape_type: str, model: Any) -> ShapeResult:
        return ShapeResult(shape_type=shape_type, model=model)

    def initialize(
        self,
        model_type: Callable[[], TModel],
        shape_type: str,
        initialize: Callable[[TModel], None],
    ) -> ShapeResult:
        model = model_type()
        initialize(model)
        return ShapeResult(shape_type=shape_type, model=model, prefix=self.prefix)

    def get_editor_shape_type(self, context: Optional[BuildEditorContext] = None) -> str:
        return f"{self.part_type.part_name()}_Edit"
