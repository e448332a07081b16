"""Query builder for GraphQL operations.

Renders operation trees into GraphQL request text, hoisting every named
variable used anywhere in the tree into the operation header.
"""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel

from .errors import InputError, MaxDepthExceeded
from .ir import Field, FieldGroup, GraphQLRequest, Operation, OperationType, VariableDeclaration
from .parser import OperationParser
from .scalars import ScalarRegistry

logger = logging.getLogger(__name__)


@dataclass
class BuildContext:
    """Variable state accumulated over one build call.

    ``definitions`` maps each variable key to its ``$key: Type`` declaration
    and ``variables`` to the raw value, both in first-insertion order.
    """
    definitions: dict[str, str] = field(default_factory=dict)
    variables: dict[str, Any] = field(default_factory=dict)

    def declare(self, key: str, option: VariableDeclaration):
        """Record a variable; a reused key keeps its position, last value wins."""
        self.definitions[key] = f"${key}: {option.type_ref}"
        self.variables[key] = option.value

    @property
    def header(self) -> str:
        """Build the variable declaration part: ($id: ID!, $input: SomeInput)"""
        if not self.definitions:
            return ""
        return f"({', '.join(self.definitions.values())})"


class QueryBuilder:
    """Builds GraphQL request strings from operation trees.

    The builder keeps no per-call state, so one instance can serve
    concurrent callers.

    Examples:
        builder = QueryBuilder()
        result = builder.create_query({"functionName": "orders", "fields": ["id", "tax"]})
        result.request  # 'query { orders { id tax } }'

        # Escape string literals and refuse very deep trees
        builder = QueryBuilder(escape_strings=True, max_depth=20)
    """

    def __init__(
        self,
        scalars: ScalarRegistry | None = None,
        *,
        escape_strings: bool = False,
        max_depth: int | None = None,
    ):
        """Initialize the builder.

        Args:
            scalars: Registry of literal handlers. When given, ``escape_strings``
                is ignored and the registry's own string handling applies.
            escape_strings: Escape quotes, backslashes and control characters
                in string literals of the default registry
            max_depth: Maximum nesting of selection sets and argument values
        """
        self.scalars = scalars if scalars is not None else ScalarRegistry(escape_strings=escape_strings)
        self.max_depth = max_depth
        self._parser = OperationParser()

    def create_query(self, operations) -> GraphQLRequest | None:
        """Build a ``query`` request, or return None if nothing was rendered."""
        return self.build(operations, OperationType.QUERY)

    def create_mutation(self, operations) -> GraphQLRequest | None:
        """Build a ``mutation`` request, or return None if nothing was rendered."""
        return self.build(operations, OperationType.MUTATION)

    def create_subscription(self, operations) -> GraphQLRequest | None:
        """Build a ``subscription`` request, or return None if nothing was rendered."""
        return self.build(operations, OperationType.SUBSCRIPTION)

    def build(self, operations, operation_type: OperationType) -> GraphQLRequest | None:
        """Build a request of the given type.

        Args:
            operations: An Operation, a mapping describing one, or a list of either
            operation_type: Keyword that opens the request

        Returns:
            The request and a copy of the variable values it references,
            or None when the operations render to nothing
        """
        ctx = BuildContext()
        request = self._build_operation(self._parser.parse(operations), ctx, operation_type)

        if not request:
            logger.debug("Nothing to build for %s", operation_type.value)
            return None

        return GraphQLRequest(request=request, variables=dict(ctx.variables))

    def _build_operation(
        self,
        operations: list[Operation],
        ctx: BuildContext,
        operation_type: OperationType | None = None,
        depth: int = 0,
    ) -> str:
        """Render operations, wrapping them in a request when a type is given.

        Without a type (nested operations) only the fragments are returned;
        their variables still land in ``ctx`` for the outermost header.
        """
        fragments = []
        for operation in operations:
            if not operation.function_name:
                continue

            parts = []
            if operation.key:
                parts.append(f"{operation.key}: ")
            parts.append(operation.function_name)
            # Variables take precedence over inline params
            args = self._build_variables(operation.variables, ctx)
            parts.append(args or self._build_params(operation.params, depth + 1))
            parts.append(self._build_fields(operation.fields, ctx, depth + 1))
            fragments.append("".join(parts))

        body = " ".join(fragments)
        if not body or operation_type is None:
            return body

        return f"{operation_type.value}{ctx.header} {{ {body} }}"

    def _build_fields(self, fields: list[Field], ctx: BuildContext, depth: int) -> str:
        """Build a selection set: { id name address { city } }"""
        if not fields:
            return ""
        self._check_depth(depth)

        selections = []
        for item in fields:
            if isinstance(item, Operation):
                selection = self._build_operation([item], ctx, depth=depth)
            elif isinstance(item, FieldGroup):
                selection = f"{item.name}{self._build_fields(item.fields, ctx, depth + 1)}"
            elif isinstance(item, str):
                selection = item
            else:
                raise InputError(f"unsupported field entry of type {type(item).__name__}")
            if selection:
                selections.append(selection)

        if not selections:
            return ""
        return f" {{ {' '.join(selections)} }}"

    def _build_variables(self, variables: dict[str, VariableDeclaration], ctx: BuildContext) -> str:
        """Build variable references: (identity: $identity1, id: $id1)"""
        if not variables:
            return ""

        refs = []
        for key, option in variables.items():
            ctx.declare(key, option)
            refs.append(f"{option.name}: ${key}")
        return f"({', '.join(refs)})"

    def _build_params(self, options, depth: int, nested: str | None = None) -> str:
        """Build an argument list, input object or list literal.

        ``nested`` is None for the top-level argument list, ``"object"`` or
        ``"array"`` for values inside it. Empty containers render as "".
        """
        if not options:
            return ""
        self._check_depth(depth)

        if isinstance(options, Mapping):
            output = " ".join(f"{key}: {self._resolve_param(option, depth)}" for key, option in options.items())
        else:
            output = ", ".join(self._resolve_param(option, depth) for option in options)

        if nested == "object":
            return f"{{ {output} }}"
        if nested == "array":
            return f"[ {output} ]"
        return f"({output})"

    def _resolve_param(self, option: Any, depth: int) -> str:
        """Render a single parameter value as a literal."""
        if isinstance(option, BaseModel):
            option = option.model_dump(by_alias=True, exclude_none=True)

        if isinstance(option, Mapping):
            return self._build_params(option, depth + 1, nested="object")
        if isinstance(option, Sequence) and not isinstance(option, (str, bytes)):
            return self._build_params(option, depth + 1, nested="array")
        return self.scalars.render(option)

    def _check_depth(self, depth: int):
        if self.max_depth is not None and depth > self.max_depth:
            logger.debug("Depth %d exceeds limit of %d", depth, self.max_depth)
            raise MaxDepthExceeded(self.max_depth)
