"""
Content item persistence.

Items are stored as one row with their parts serialised as JSON. Index
providers project items into dedicated index tables that queries run against.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Protocol, Sequence, Type

from sqlalchemy import JSON, Column, DateTime, String, delete, select
from sqlalchemy.orm import Session
from sqlalchemy.sql import func

from trainingdemo.content_management.item import ContentItem, ContentPart
from trainingdemo.models.base import Base

logger = logging.getLogger(__name__)


class ContentItemRecord(Base):
    __tablename__ = "content_items"

    id = Column(String, primary_key=True)
    content_type = Column(String, index=True, nullable=False)
    display_text = Column(String, nullable=True)
    parts = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())


class IndexProvider(Protocol):
    """Maps a content item to rows of one index table."""

    index_type: Type[Base]

    def map(self, item: ContentItem) -> List[Any]: ...


class ContentItemStore:
    def __init__(
        self,
        session: Session,
        part_types: Mapping[str, Type[ContentPart]],
        index_providers: Sequence[IndexProvider] = (),
    ):
        self.session = session
        self.part_types = dict(part_types)
        self.index_providers = list(index_providers)

    def save(self, item: ContentItem) -> ContentItem:
        record = self.session.get(ContentItemRecord, item.id)
        if record is None:
            record = ContentItemRecord(id=item.id, content_type=item.content_type)
            self.session.add(record)
        record.display_text = item.display_text
        record.parts = item.dump_parts()
        self.session.flush()

        for provider in self.index_providers:
            index_type = provider.index_type
            self.session.execute(
                delete(index_type).where(index_type.content_item_id == item.id)
            )
            for row in provider.map(item):
                self.session.add(row)

        self.session.flush()
        logger.debug(f"Saved content item {item.id} ({item.content_type})")
        return item

    def _to_item(self, record: ContentItemRecord) -> ContentItem:
        item = ContentItem(
            id=record.id,
            content_type=record.content_type,
            display_text=record.display_text,
        )
        parts: Dict[str, Any] = record.parts or {}
        for name, data in parts.items():
            part_type = self.part_types.get(name)
            if part_type is None:
                logger.warning(f"Skipping unknown part {name} on content item {record.id}")
                continue
            item.weld(part_type.model_validate(data))
        return item

    def get(self, item_id: str) -> Optional[ContentItem]:
        record = self.session.get(ContentItemRecord, item_id)
        return self._to_item(record) if record is not None else None

    def get_many(self, item_ids: Iterable[str]) -> List[ContentItem]:
        """Items in the order of `item_ids`; missing ids are skipped."""
        ids = list(dict.fromkeys(item_ids))
        if not ids:
            return []
        records = (
            self.session.execute(select(ContentItemRecord).where(ContentItemRecord.id.in_(ids)))
            .scalars()
            .all()
        )
        by_id = {r.id: r for r in records}
        return [self._to_item(by_id[i]) for i in ids if i in by_id]
