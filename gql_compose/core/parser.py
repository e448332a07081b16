"""Input parser for plain operation trees.

Converts mappings and sequences (e.g. decoded JSON) into the IR, resolving
which variant every selection entry is once, up front.
"""

import json
import os
from collections.abc import Mapping, Sequence
from typing import Any

from .errors import InputError
from .ir import Field, FieldGroup, Operation, VariableDeclaration

FUNCTION_NAME_KEYS = ("functionName", "function_name")


def is_operation(data: Any) -> bool:
    """Check if a mapping describes an operation rather than field groups."""
    return isinstance(data, Mapping) and any(k in data for k in FUNCTION_NAME_KEYS)


class OperationParser:
    """Parses plain operation trees into IR."""

    def parse(self, data: Any) -> list[Operation]:
        """Parse one operation or a sequence of operations.

        IR objects are passed through untouched.
        """
        if isinstance(data, Operation):
            return [data]
        if isinstance(data, Mapping):
            return [self.parse_operation(data, "$")]
        if isinstance(data, Sequence) and not isinstance(data, str):
            return [
                item if isinstance(item, Operation) else self.parse_operation(item, f"$[{i}]")
                for i, item in enumerate(data)
            ]
        raise InputError(f"expected an operation or a list of operations, got {type(data).__name__}")

    def parse_operation(self, data: Any, path: str = "$") -> Operation:
        if isinstance(data, Operation):
            return data
        if not isinstance(data, Mapping):
            raise InputError(f"expected a mapping, got {type(data).__name__}", path)

        function_name = next((data[k] for k in FUNCTION_NAME_KEYS if k in data), None)
        params = data.get("params") or {}
        if not isinstance(params, Mapping):
            raise InputError("params must be a mapping", f"{path}.params")

        return Operation(
            function_name=function_name or "",
            key=data.get("key") or None,
            fields=self.parse_fields(data.get("fields"), f"{path}.fields"),
            params=dict(params),
            variables=self.parse_variables(data.get("variables"), f"{path}.variables"),
        )

    def parse_fields(self, data: Any, path: str) -> list[Field]:
        """Parse a selection list into plain names, field groups and operations."""
        if not data:
            return []
        if isinstance(data, str) or not isinstance(data, Sequence):
            raise InputError("fields must be a list", path)

        fields: list[Field] = []
        for i, item in enumerate(data):
            item_path = f"{path}[{i}]"
            if isinstance(item, (str, FieldGroup, Operation)):
                fields.append(item)
            elif is_operation(item):
                fields.append(self.parse_operation(item, item_path))
            elif isinstance(item, Mapping):
                # One group per entry; an empty mapping selects nothing
                for name, sub_fields in item.items():
                    fields.append(FieldGroup(
                        name=name,
                        fields=self.parse_fields(sub_fields, f"{item_path}.{name}"),
                    ))
            else:
                raise InputError(f"unsupported field entry of type {type(item).__name__}", item_path)
        return fields

    def parse_variables(self, data: Any, path: str) -> dict[str, VariableDeclaration]:
        if not data:
            return {}
        if not isinstance(data, Mapping):
            raise InputError("variables must be a mapping", path)

        variables = {}
        for key, option in data.items():
            var_path = f"{path}.{key}"
            if isinstance(option, VariableDeclaration):
                variables[key] = option
                continue
            if not isinstance(option, Mapping):
                raise InputError("variable declaration must be a mapping", var_path)
            for required_key in ("type", "name"):
                if required_key not in option:
                    raise InputError(f"missing '{required_key}'", var_path)
                if not option[required_key]:
                    raise InputError(f"empty '{required_key}'", var_path)
            variables[key] = VariableDeclaration(
                type=option["type"],
                name=option["name"],
                value=option.get("value"),
                list=bool(option.get("list", False)),
                required=bool(option.get("required", False)),
            )
        return variables


def load_operations(path: str) -> list[Operation]:
    """Load and parse operations from a JSON file."""
    if not os.path.isfile(path):
        raise InputError(f"no such file: {path}")
    with open(path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise InputError(f"invalid JSON: {e}", os.path.basename(path)) from e
    return OperationParser().parse(data)
