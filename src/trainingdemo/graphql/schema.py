"""
GraphQL schema assembly.

Builds the read-only Query type from the part registrations: one list field
per part, filtered by its where input and paginated with first/after.
"""

import logging
from typing import List, Optional

from fastapi import Depends, Request
import strawberry
from sqlalchemy import select
from sqlalchemy.orm import Session
from strawberry.fastapi import GraphQLRouter
from strawberry.types import Info

from trainingdemo import __version__
from trainingdemo.exceptions import ValidationError

from .filters import compile_where
from .registrar import PartGraphRegistration

logger = logging.getLogger(__name__)


@strawberry.type
class SchemaInfo:
    """GraphQL schema information."""

    version: str
    description: str
    supported_types: List[str]


def _page_offset(first: int, after: Optional[str]) -> int:
    """Row offset for a page; `after` is the zero-based position of the last row seen."""
    if first < 0:
        raise ValidationError(f"first must not be negative, got {first}", field="first")
    if not after:
        return 0
    try:
        position = int(after)
    except ValueError:
        raise ValidationError(f"Invalid cursor: {after!r}", field="after") from None
    if position < 0:
        raise ValidationError(f"Invalid cursor: {after!r}", field="after")
    return position + 1


def _part_list_field(registration: PartGraphRegistration):
    part_type = registration.part_type
    object_type = registration.object_type
    where_type = registration.where_input_type
    aliases = registration.aliases()
    index_type = registration.index_type()

    def resolve(
        info: Info,
        where: Optional[where_type] = None,
        first: int = 50,
        after: Optional[str] = None,
    ) -> List[object_type]:
        db: Session = info.context["db"]
        store = info.context["store"]

        query = select(index_type.content_item_id)
        if where is not None:
            query = query.where(compile_where(where, aliases))
        offset = _page_offset(first, after)
        query = query.order_by(index_type.content_item_id).offset(offset).limit(first)

        item_ids = db.execute(query).scalars().all()
        nodes = []
        for item in store.get_many(item_ids):
            part = item.get(part_type)
            if part is not None:
                nodes.append(object_type.from_part(item.id, part))
        return nodes

    return strawberry.field(
        resolver=resolve,
        name=registration.field_name,
        description=f"Content items with a {registration.part_name}.",
    )


def build_schema(registrations: List[PartGraphRegistration]) -> strawberry.Schema:
    supported = [r.part_name for r in registrations]

    def schema_info() -> SchemaInfo:
        return SchemaInfo(
            version=__version__,
            description="Content part GraphQL API - read-only",
            supported_types=supported,
        )

    namespace = {"__annotations__": {}, "schema_info": strawberry.field(resolver=schema_info)}
    for registration in registrations:
        namespace[registration.field_name] = _part_list_field(registration)
    query = strawberry.type(type("Query", (), namespace))
    logger.info(f"Built GraphQL schema for parts: {supported}")
    return strawberry.Schema(query=query)


def create_graphql_router(schema: strawberry.Schema, session_factory, store_factory) -> GraphQLRouter:
    """
    Create the GraphQL router with a per-request context.

    Args:
        schema: Schema built by the registrar
        session_factory: Factory creating database sessions
        store_factory: Callable turning a session into a content item store
    """

    def get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    async def get_context(request: Request, db: Session = Depends(get_db)):
        return {
            "request": request,
            "db": db,
            "store": store_factory(db),
        }

    return GraphQLRouter(schema, context_getter=get_context)
