from __future__ import annotations

from typing import List

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String

from trainingdemo.content_management.item import ContentItem
from trainingdemo.models.base import Base
from trainingdemo.person.models import PersonPart


class PersonPartIndex(Base):
    """
    Query projection of PersonPart, one row per content item.

    Queries filter on these columns instead of the JSON parts of the item.
    """

    __tablename__ = "person_part_index"

    id = Column(Integer, primary_key=True, autoincrement=True)
    content_item_id = Column(
        String,
        ForeignKey("content_items.id", ondelete="CASCADE"),
        index=True,
        nullable=False,
    )
    name = Column(String, index=True, nullable=True)
    birth_date_utc = Column(DateTime(timezone=True), index=True, nullable=True)
    handedness = Column(String, nullable=True)


class PersonPartIndexProvider:
    index_type = PersonPartIndex

    def map(self, item: ContentItem) -> List[PersonPartIndex]:
        part = item.get(PersonPart)
        if part is None:
            return []
        return [
            PersonPartIndex(
                content_item_id=item.id,
                name=part.name,
                birth_date_utc=part.birth_date_utc,
                handedness=part.handedness.value if part.handedness else None,
            )
        ]
