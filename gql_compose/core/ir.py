"""Intermediate Representation (IR) for GraphQL request trees.

This module defines dataclasses describing the operations, field selections
and variable declarations a caller wants rendered, plus the rendered result.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Union


class OperationType(Enum):
    """Operation keywords that may open a request."""
    QUERY = "query"
    MUTATION = "mutation"
    SUBSCRIPTION = "subscription"


@dataclass
class VariableDeclaration:
    """A named variable bound to one argument of an operation.

    The key under which the declaration is stored in ``Operation.variables``
    becomes the ``$``-prefixed identifier; ``name`` is the argument it binds to.
    """
    type: str
    name: str
    value: Any = None
    list: bool = False
    required: bool = False

    @property
    def type_ref(self) -> str:
        """Return the GraphQL type reference, e.g. ``[ID!]``."""
        type_str = f"{self.type}!" if self.required else self.type
        return f"[{type_str}]" if self.list else type_str


@dataclass
class FieldGroup:
    """A field owning its own sub-selection, with no arguments."""
    name: str
    fields: list["Field"] = field(default_factory=list)


@dataclass
class Operation:
    """One invocation inside a request body, or a parameterized nested field."""
    function_name: str
    key: str | None = None  # Alias
    fields: list["Field"] = field(default_factory=list)
    params: dict[str, Any] = field(default_factory=dict)
    variables: dict[str, VariableDeclaration] = field(default_factory=dict)


# A selection entry is one of a closed set of variants
Field = Union[str, FieldGroup, Operation]


@dataclass
class GraphQLRequest:
    """A rendered request and the variable values it references."""
    request: str
    variables: dict[str, Any] = field(default_factory=dict)

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON body expected by GraphQL-over-HTTP servers."""
        payload: dict[str, Any] = {"query": self.request}
        if self.variables:
            payload["variables"] = dict(self.variables)
        return payload
