"""Literal handlers for scalar parameter values.

Provides a protocol for defining how Python values are written as GraphQL
literals when they are inlined into an argument list.

Example usage:
    from decimal import Decimal
    from gql_compose.core.scalars import ScalarRegistry

    class MoneyHandler:
        def render(self, value):
            return f'"{value:.2f}"'

    registry = ScalarRegistry()
    registry.register(Decimal, MoneyHandler())
"""

from datetime import date, datetime, timezone
from decimal import Decimal
from enum import Enum
from typing import Any, Protocol, runtime_checkable
from uuid import UUID


@runtime_checkable
class ScalarHandler(Protocol):
    """Protocol for scalar literal handlers.

    Implement this protocol to control how values of a Python type are
    written into a request.
    """

    def render(self, value: Any) -> str:
        """Return the GraphQL literal text for ``value``."""
        ...


def quote(value: str, escape: bool = False) -> str:
    """Wrap a string in double quotes, optionally escaping it."""
    if escape:
        value = (
            value.replace("\\", "\\\\")
            .replace('"', '\\"')
            .replace("\n", "\\n")
            .replace("\r", "\\r")
            .replace("\t", "\\t")
        )
    return f'"{value}"'


def to_iso_instant(value: datetime) -> str:
    """Format a datetime as a UTC instant with millisecond precision.

    Naive datetimes are taken to be UTC already.
    """
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class BooleanHandler:
    """Handler for booleans (``true``/``false``)."""

    def render(self, value: bool) -> str:
        return "true" if value else "false"


class NumberHandler:
    """Handler for ints, floats and Decimals, written unquoted."""

    def render(self, value) -> str:
        return str(value)


class NullHandler:
    def render(self, value: None) -> str:
        return "null"


class StringHandler:
    """Handler for strings.

    Strings are embedded as-is unless ``escape`` is set, so a value
    containing a double quote produces broken output by default.
    """

    def __init__(self, escape: bool = False):
        self.escape = escape

    def render(self, value: str) -> str:
        return quote(value, self.escape)


class DateTimeHandler:
    """Handler for datetimes as quoted ISO 8601 UTC instants."""

    def render(self, value: datetime) -> str:
        return quote(to_iso_instant(value))


class DateHandler:
    """Handler for dates as quoted ISO 8601 calendar dates.

    A plain ``date`` carries no time of day, so it renders as
    ``"YYYY-MM-DD"`` rather than as an instant. Pass a ``datetime`` to get
    ``"YYYY-MM-DDTHH:MM:SS.sssZ"``, or register a different handler for
    ``date``.
    """

    def render(self, value: date) -> str:
        return quote(value.isoformat())


class UUIDHandler:
    def render(self, value: UUID) -> str:
        return quote(str(value))


class EnumHandler:
    """Handler for Enum members, written as bare GraphQL enum values."""

    def render(self, value: Enum) -> str:
        return str(value.value)


class ScalarRegistry:
    """Registry of literal handlers keyed by Python type.

    Lookup walks the value's MRO, so ``bool`` resolves before ``int`` and
    ``datetime`` before ``date``. Datetimes render as UTC instants, plain
    dates as calendar dates (see ``DateHandler``).

    Example:
        registry = ScalarRegistry()
        registry.render(True)  # "true"
        registry.render(datetime(2024, 1, 15))  # '"2024-01-15T00:00:00.000Z"'
    """

    def __init__(self, escape_strings: bool = False):
        self._handlers: dict[type, ScalarHandler] = {}
        self._fallback: ScalarHandler = StringHandler(escape=escape_strings)
        self._register_defaults()

    def _register_defaults(self):
        """Register built-in default handlers."""
        self.register(bool, BooleanHandler())
        self.register(int, NumberHandler())
        self.register(float, NumberHandler())
        self.register(Decimal, NumberHandler())
        self.register(type(None), NullHandler())
        self.register(str, self._fallback)
        self.register(datetime, DateTimeHandler())
        self.register(date, DateHandler())
        self.register(UUID, UUIDHandler())
        self.register(Enum, EnumHandler())

    def register(self, python_type: type, handler: ScalarHandler):
        """Register a handler for a Python type."""
        self._handlers[python_type] = handler

    def get(self, python_type: type) -> ScalarHandler | None:
        """Get the closest handler for a type, or None if none applies."""
        if python_type in self._handlers:
            return self._handlers[python_type]
        # str/int mixin enums still render as enum values
        if issubclass(python_type, Enum) and Enum in self._handlers:
            return self._handlers[Enum]
        for klass in python_type.__mro__:
            if klass in self._handlers:
                return self._handlers[klass]
        return None

    def has(self, python_type: type) -> bool:
        """Check if a handler is registered for exactly this type."""
        return python_type in self._handlers

    def render(self, value: Any) -> str:
        """Render a scalar value; unknown types are written as strings."""
        handler = self.get(type(value))
        if handler is None:
            return self._fallback.render(str(value))
        return handler.render(value)
