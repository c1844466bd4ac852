"""
GraphQL exposure of content parts.

Part modules register an object type, a where input type and index aliases
with the SchemaRegistrar; the host assembles the schema from them once.
"""

from .filters import DateTimeFilter, StringFilter, compile_where
from .registrar import IndexAlias, IndexAliasProvider, SchemaRegistrar
from .schema import build_schema, create_graphql_router

__all__ = [
    "DateTimeFilter",
    "StringFilter",
    "compile_where",
    "IndexAlias",
    "IndexAliasProvider",
    "SchemaRegistrar",
    "build_schema",
    "create_graphql_router",
]
