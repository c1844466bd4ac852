from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import select

from trainingdemo.content_management.clock import as_utc, utcnow
from trainingdemo.content_management.item import ContentItem
from trainingdemo.content_management.store import ContentItemStore
from trainingdemo.person.indexes import PersonPartIndex


def years_before(moment: datetime, years: int) -> datetime:
    try:
        return moment.replace(year=moment.year - years)
    except ValueError:
        # Feb 29 in a non-leap target year
        return moment.replace(year=moment.year - years, day=28)


class PersonListService:
    def __init__(self, store: ContentItemStore):
        self.store = store

    def older_than(self, years: int, now: Optional[datetime] = None) -> List[ContentItem]:
        """Items whose person was born more than `years` years before `now`, oldest first."""
        if years < 0:
            raise ValueError("years must not be negative")
        threshold = years_before(as_utc(now) if now is not None else utcnow(), years)
        item_ids = (
            self.store.session.execute(
                select(PersonPartIndex.content_item_id)
                .where(PersonPartIndex.birth_date_utc < threshold)
                .order_by(PersonPartIndex.birth_date_utc)
            )
            .scalars()
            .all()
        )
        return self.store.get_many(item_ids)
