"""
Generic where-input filters and their compilation to SQL.

A where input is a strawberry input whose fields are either filter inputs
(StringFilter, DateTimeFilter, or any input with the same operator names)
or the AND/OR/NOT combinators. Field names are looked up in the part's
index aliases so the query layer never needs to know the index layout.
"""

import dataclasses
from datetime import datetime
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional

import strawberry
from sqlalchemy import and_, false, not_, or_, true
from sqlalchemy.sql.elements import ColumnElement
from strawberry.utils.str_converters import to_camel_case

from trainingdemo.content_management.clock import as_utc
from trainingdemo.exceptions import ConfigurationError

from .registrar import IndexAlias


@strawberry.input(description="Predicates on a text field.")
class StringFilter:
    eq: Optional[str] = None
    neq: Optional[str] = None
    contains: Optional[str] = None
    starts_with: Optional[str] = None
    ends_with: Optional[str] = None
    in_: Optional[List[str]] = strawberry.field(name="in", default=None)
    not_in: Optional[List[str]] = None


@strawberry.input(description="Predicates on a UTC date/time field.")
class DateTimeFilter:
    eq: Optional[datetime] = None
    neq: Optional[datetime] = None
    lt: Optional[datetime] = None
    lte: Optional[datetime] = None
    gt: Optional[datetime] = None
    gte: Optional[datetime] = None


_OPERATORS: Dict[str, Callable[[Any, Any], ColumnElement]] = {
    "eq": lambda column, value: column == value,
    "neq": lambda column, value: column != value,
    "lt": lambda column, value: column < value,
    "lte": lambda column, value: column <= value,
    "gt": lambda column, value: column > value,
    "gte": lambda column, value: column >= value,
    "contains": lambda column, value: column.contains(value, autoescape=True),
    "starts_with": lambda column, value: column.startswith(value, autoescape=True),
    "ends_with": lambda column, value: column.endswith(value, autoescape=True),
    "in_": lambda column, value: column.in_(value),
    "not_in": lambda column, value: column.not_in(value),
}


def _storage_value(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, list):
        return [_storage_value(v) for v in value]
    return value


def _set_fields(obj: Any):
    for f in dataclasses.fields(obj):
        value = getattr(obj, f.name)
        if value is not None and value is not strawberry.UNSET:
            yield f.name, value


def _compile_filter(column: Any, predicate: Any) -> List[ColumnElement]:
    clauses = []
    for op, value in _set_fields(predicate):
        compile_op = _OPERATORS.get(op)
        if compile_op is None:
            raise ConfigurationError(f"Unsupported filter operator: {op}", config_key="graphql")
        clauses.append(compile_op(column, _storage_value(value)))
    return clauses


def compile_where(where: Any, aliases: Mapping[str, IndexAlias]) -> ColumnElement:
    """Compile a where input into one SQLAlchemy clause over the aliased index columns."""
    clauses: List[ColumnElement] = []
    for name, value in _set_fields(where):
        if name == "and_":
            clauses.append(and_(true(), *(compile_where(w, aliases) for w in value)))
        elif name == "or_":
            # An empty OR list matches nothing.
            clauses.append(or_(false(), *(compile_where(w, aliases) for w in value)))
        elif name == "not_":
            clauses.append(not_(compile_where(value, aliases)))
        else:
            alias = aliases.get(to_camel_case(name))
            if alias is None:
                raise ConfigurationError(
                    f"No index alias for queryable field {to_camel_case(name)!r}",
                    config_key="index_alias",
                )
            column = getattr(alias.index, alias.column)
            clauses.extend(_compile_filter(column, value))
    return and_(true(), *clauses)
