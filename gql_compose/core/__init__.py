"""Core modules for building GraphQL requests."""

from .errors import BuildError, InputError, MaxDepthExceeded
from .ir import (
    Field,
    FieldGroup,
    GraphQLRequest,
    Operation,
    OperationType,
    VariableDeclaration,
)
from .parser import OperationParser, load_operations
from .query_builder import BuildContext, QueryBuilder
from .scalars import (
    DateHandler,
    DateTimeHandler,
    EnumHandler,
    ScalarHandler,
    ScalarRegistry,
    StringHandler,
    UUIDHandler,
)

__all__ = [
    # Errors
    "BuildError",
    "InputError",
    "MaxDepthExceeded",
    # IR types
    "Field",
    "FieldGroup",
    "GraphQLRequest",
    "Operation",
    "OperationType",
    "VariableDeclaration",
    # Parser
    "OperationParser",
    "load_operations",
    # Scalars
    "ScalarHandler",
    "ScalarRegistry",
    "StringHandler",
    "DateTimeHandler",
    "DateHandler",
    "UUIDHandler",
    "EnumHandler",
    # Query Builder
    "BuildContext",
    "QueryBuilder",
]
