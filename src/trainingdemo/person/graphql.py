"""
GraphQL exposure of PersonPart.

Registered only when the host has the "graphql" feature enabled (see
startup.PersonGraphQLStartup).
"""

from datetime import datetime
from typing import Iterable, List, Optional

import strawberry

from trainingdemo.content_management.clock import as_utc, utcnow
from trainingdemo.graphql import DateTimeFilter, IndexAlias, SchemaRegistrar, StringFilter
from trainingdemo.person.indexes import PersonPartIndex
from trainingdemo.person.models import Handedness, PersonPart

HandednessEnum = strawberry.enum(Handedness, name="Handedness", description="Preferred hand.")


def age_on(birth_date: datetime, today: datetime) -> int:
    birth_date, today = as_utc(birth_date), as_utc(today)
    years = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years


@strawberry.type(name="PersonPart", description="A person attached to a content item.")
class PersonPartObject:
    content_item_id: str
    name: Optional[str]
    birth_date_utc: Optional[datetime]
    handedness: Optional[HandednessEnum]

    @strawberry.field(description="Age in full years, as of now.")
    def age(self) -> Optional[int]:
        if self.birth_date_utc is None:
            return None
        return age_on(self.birth_date_utc, utcnow())

    @classmethod
    def from_part(cls, content_item_id: str, part: PersonPart) -> "PersonPartObject":
        return cls(
            content_item_id=content_item_id,
            name=part.name,
            birth_date_utc=part.birth_date_utc,
            handedness=part.handedness,
        )


@strawberry.input(description="Predicates on handedness.")
class HandednessFilter:
    eq: Optional[HandednessEnum] = None
    neq: Optional[HandednessEnum] = None
    in_: Optional[List[HandednessEnum]] = strawberry.field(name="in", default=None)


@strawberry.input(name="PersonPartWhereInput", description="Filters on the person part.")
class PersonPartWhereInput:
    name: Optional[StringFilter] = None
    birth_date_utc: Optional[DateTimeFilter] = None
    handedness: Optional[HandednessFilter] = None
    and_: Optional[List["PersonPartWhereInput"]] = strawberry.field(name="AND", default=None)
    or_: Optional[List["PersonPartWhereInput"]] = strawberry.field(name="OR", default=None)
    not_: Optional["PersonPartWhereInput"] = strawberry.field(name="NOT", default=None)


class PersonPartIndexAliasProvider:
    """Queryable PersonPart fields and the PersonPartIndex columns behind them."""

    _aliases = (
        IndexAlias(alias="name", index=PersonPartIndex, column="name"),
        IndexAlias(alias="birthDateUtc", index=PersonPartIndex, column="birth_date_utc"),
        IndexAlias(alias="handedness", index=PersonPartIndex, column="handedness"),
    )

    def get_aliases(self) -> Iterable[IndexAlias]:
        return self._aliases


def register_person_graphql(registrar: SchemaRegistrar) -> None:
    registrar.add_object_graph_type(PersonPart, PersonPartObject)
    registrar.add_input_object_graph_type(PersonPart, PersonPartWhereInput)
    registrar.add_index_alias_provider(PersonPart, PersonPartIndexAliasProvider())
