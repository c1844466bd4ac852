"""
Module shell.

Startups contribute drivers, part types, index providers and GraphQL
registrations through explicit construction. A startup that declares
required features only runs when the host has all of them enabled.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Sequence, Tuple, Type

from sqlalchemy.orm import Session

from trainingdemo.content_management.display import PartRenderer
from trainingdemo.content_management.item import ContentPart
from trainingdemo.content_management.manager import ContentDisplayManager
from trainingdemo.content_management.placement import PlacementRules
from trainingdemo.content_management.store import ContentItemStore, IndexProvider
from trainingdemo.graphql.registrar import SchemaRegistrar

logger = logging.getLogger(__name__)


class StartupBase:
    required_features: Tuple[str, ...] = ()

    def configure(self, shell: "Shell") -> None:
        raise NotImplementedError


class Shell:
    def __init__(
        self,
        placement: Optional[PlacementRules] = None,
        enabled_features: Iterable[str] = (),
    ):
        self.placement = placement or PlacementRules()
        self.enabled_features = set(enabled_features)
        self.drivers: List[PartRenderer] = []
        self.part_types: Dict[str, Type[ContentPart]] = {}
        self.index_providers: List[IndexProvider] = []
        self.registrar = SchemaRegistrar()

    def is_enabled(self, feature: str) -> bool:
        return feature in self.enabled_features

    def add_part(self, part_type: Type[ContentPart]) -> None:
        self.part_types[part_type.part_name()] = part_type

    def add_driver(self, driver: PartRenderer) -> None:
        self.drivers.append(driver)

    def add_index_provider(self, provider: IndexProvider) -> None:
        self.index_providers.append(provider)

    def run_startups(self, startups: Sequence[StartupBase]) -> "Shell":
        for startup in startups:
            missing = [f for f in startup.required_features if not self.is_enabled(f)]
            if missing:
                logger.info(f"Skipping {type(startup).__name__}: features not enabled {missing}")
                continue
            startup.configure(self)
        return self

    def display_manager(self) -> ContentDisplayManager:
        return ContentDisplayManager(self.drivers, self.placement)

    def store(self, session: Session) -> ContentItemStore:
        return ContentItemStore(session, self.part_types, self.index_providers)
