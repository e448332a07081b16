"""Command-line interface for gql-compose."""

import json
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any
from uuid import UUID

import click
from graphql import GraphQLSyntaxError, parse
from pydantic import BaseModel

from .core.errors import BuildError
from .core.ir import OperationType
from .core.parser import load_operations
from .core.query_builder import QueryBuilder
from .core.scalars import to_iso_instant


def serialize_value(value: Any) -> Any:
    """Convert a variable value into plain JSON-compatible data."""
    if isinstance(value, BaseModel):
        # Convert Pydantic model to dict, using aliases and excluding None
        return value.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(value, dict):
        return {k: serialize_value(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [serialize_value(v) for v in value]
    if isinstance(value, datetime):
        return to_iso_instant(value)
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (UUID, Decimal)):
        return str(value)
    return value


@click.group()
@click.version_option(package_name="gql-compose")
def main():
    """Build GraphQL requests from JSON operation trees."""
    pass


@main.command()
@click.argument(
    "kind",
    type=click.Choice([t.value for t in OperationType]),
)
@click.option(
    "--input",
    "-i",
    "input_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="JSON file holding one operation or a list of operations.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    help="Write the result to this file instead of stdout.",
)
@click.option(
    "--escape-strings",
    is_flag=True,
    help="Escape quotes and backslashes in string literals.",
)
@click.option(
    "--max-depth",
    type=click.IntRange(min=1),
    default=None,
    help="Fail when selections or arguments nest deeper than this.",
)
@click.option(
    "--check",
    is_flag=True,
    help="Parse the built request to make sure it is valid GraphQL syntax.",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def build(
    kind: str,
    input_path: str,
    output: str | None,
    escape_strings: bool,
    max_depth: int | None,
    check: bool,
    verbose: bool,
):
    """Build a request and print it with its variables as JSON.

    Examples:

        gql-compose build query --input ./orders.json

        gql-compose build mutation -i ./create.json -o ./request.json --check
    """
    operation_type = OperationType(kind)

    try:
        operations = load_operations(input_path)
        if verbose:
            click.echo(f"Loaded {len(operations)} operation(s) from {input_path}", err=True)

        builder = QueryBuilder(escape_strings=escape_strings, max_depth=max_depth)
        result = builder.build(operations, operation_type)
    except BuildError as e:
        raise click.ClickException(str(e)) from e

    if result is None:
        raise click.ClickException("Nothing to build: no operation produced any output.")

    if check:
        try:
            parse(result.request)
        except GraphQLSyntaxError as e:
            raise click.ClickException(f"Built request is not valid GraphQL: {e.message}") from e
        if verbose:
            click.echo("Syntax check passed", err=True)

    if verbose:
        click.echo(f"  Variables: {len(result.variables)}", err=True)

    content = json.dumps(
        {"request": result.request, "variables": serialize_value(result.variables)},
        indent=2,
    )

    if output:
        output_path = Path(output).resolve()
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w") as f:
            f.write(content + "\n")
        click.echo(f"Wrote request to {output_path}")
    else:
        click.echo(content)


if __name__ == "__main__":
    main()
