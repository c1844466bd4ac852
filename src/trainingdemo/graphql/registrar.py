"""
Schema registrar.

Collects, per content part, the three mappings the query layer needs:
- an object type describing the part's queryable output fields
- an input type describing the part's "where" predicates
- index aliases from queryable field names to index table columns

Registration happens once at startup. Registering the same descriptor again
is a no-op; anything else after the schema was built is a setup error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Protocol, Type

from trainingdemo.content_management.item import ContentPart
from trainingdemo.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IndexAlias:
    alias: str
    index: Type[Any]
    column: str


class IndexAliasProvider(Protocol):
    def get_aliases(self) -> Iterable[IndexAlias]: ...


@dataclass
class PartGraphRegistration:
    part_type: Type[ContentPart]
    object_type: Optional[type] = None
    where_input_type: Optional[type] = None
    alias_providers: List[IndexAliasProvider] = field(default_factory=list)

    @property
    def part_name(self) -> str:
        return self.part_type.part_name()

    @property
    def field_name(self) -> str:
        name = self.part_name
        return name[:1].lower() + name[1:]

    def aliases(self) -> Dict[str, IndexAlias]:
        result: Dict[str, IndexAlias] = {}
        for provider in self.alias_providers:
            for alias in provider.get_aliases():
                existing = result.get(alias.alias)
                if existing is not None and existing != alias:
                    raise ConfigurationError(
                        f"Conflicting index aliases for {self.part_name}.{alias.alias}",
                        config_key="index_alias",
                    )
                result[alias.alias] = alias
        return result

    def index_type(self) -> Type[Any]:
        index_types = {alias.index for alias in self.aliases().values()}
        if len(index_types) != 1:
            raise ConfigurationError(
                f"{self.part_name} aliases must target exactly one index, got {len(index_types)}",
                config_key="index_alias",
            )
        return index_types.pop()


def _definition(graph_type: type):
    return getattr(graph_type, "__strawberry_definition__", None)


class SchemaRegistrar:
    def __init__(self) -> None:
        self._registrations: Dict[str, PartGraphRegistration] = {}
        self._frozen = False

    @property
    def registrations(self) -> List[PartGraphRegistration]:
        return list(self._registrations.values())

    def is_registered(self, part_type: Type[ContentPart]) -> bool:
        return part_type.part_name() in self._registrations

    def _entry(self, part_type: Type[ContentPart]) -> PartGraphRegistration:
        entry = self._registrations.get(part_type.part_name())
        if entry is None:
            self._ensure_open(part_type.part_name())
            entry = PartGraphRegistration(part_type=part_type)
            self._registrations[part_type.part_name()] = entry
        return entry

    def _ensure_open(self, what: str) -> None:
        if self._frozen:
            raise ConfigurationError(
                f"Cannot register {what}: the GraphQL schema is already built",
                config_key="graphql",
            )

    def add_object_graph_type(self, part_type: Type[ContentPart], object_type: type) -> None:
        definition = _definition(object_type)
        if definition is None or definition.is_input:
            raise ConfigurationError(
                f"{object_type!r} is not a GraphQL object type", config_key="graphql"
            )
        if not callable(getattr(object_type, "from_part", None)):
            raise ConfigurationError(
                f"{object_type.__name__} must define from_part(content_item_id, part)",
                config_key="graphql",
            )
        entry = self._entry(part_type)
        if entry.object_type is object_type:
            return
        if entry.object_type is not None:
            raise ConfigurationError(
                f"{entry.part_name} already has object type {entry.object_type.__name__}",
                config_key="graphql",
            )
        self._ensure_open(object_type.__name__)
        entry.object_type = object_type
        logger.info(f"Registered GraphQL object type {object_type.__name__} for {entry.part_name}")

    def add_input_object_graph_type(self, part_type: Type[ContentPart], input_type: type) -> None:
        definition = _definition(input_type)
        if definition is None or not definition.is_input:
            raise ConfigurationError(
                f"{input_type!r} is not a GraphQL input type", config_key="graphql"
            )
        entry = self._entry(part_type)
        if entry.where_input_type is input_type:
            return
        if entry.where_input_type is not None:
            raise ConfigurationError(
                f"{entry.part_name} already has where input {entry.where_input_type.__name__}",
                config_key="graphql",
            )
        self._ensure_open(input_type.__name__)
        entry.where_input_type = input_type
        logger.info(f"Registered GraphQL input type {input_type.__name__} for {entry.part_name}")

    def add_index_alias_provider(
        self, part_type: Type[ContentPart], provider: IndexAliasProvider
    ) -> None:
        entry = self._entry(part_type)
        if any(type(p) is type(provider) for p in entry.alias_providers):
            return
        self._ensure_open(type(provider).__name__)
        entry.alias_providers.append(provider)

    def validate(self) -> None:
        for entry in self._registrations.values():
            missing = [
                name
                for name, value in (
                    ("object type", entry.object_type),
                    ("where input type", entry.where_input_type),
                    ("index alias provider", entry.alias_providers),
                )
                if not value
            ]
            if missing:
                raise ConfigurationError(
                    f"Incomplete GraphQL registration for {entry.part_name}: missing {', '.join(missing)}",
                    config_key="graphql",
                )
            index_type = entry.index_type()
            if not hasattr(index_type, "content_item_id"):
                raise ConfigurationError(
                    f"Index {index_type.__name__} has no content_item_id column",
                    config_key="index_alias",
                )

    def build_schema(self):
        from .schema import build_schema

        self.validate()
        self._frozen = True
        return build_schema(self.registrations)
