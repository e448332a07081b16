"""Build GraphQL request strings and variables from operation trees."""

from .core import GraphQLRequest, Operation, QueryBuilder

__all__ = ["GraphQLRequest", "Operation", "QueryBuilder"]
