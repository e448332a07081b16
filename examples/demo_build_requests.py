#!/usr/bin/env python3
"""Demonstration of the query builder.

This script shows how to:
1. Build a query with inline parameters and nested selections
2. Build a mutation that hoists named variables into the header
3. Build requests from IR objects instead of plain mappings

Note: This demo doesn't make real API calls - it only prints requests.
"""

from datetime import datetime, timezone

from gql_compose.core import (
    FieldGroup,
    Operation,
    QueryBuilder,
    VariableDeclaration,
)


def main():
    builder = QueryBuilder()

    print("=== gql-compose demo ===\n")

    print("1. Query with params and nested fields")
    result = builder.create_query({
        "functionName": "orders",
        "params": {"status": "OPEN", "since": datetime(2024, 1, 1, tzinfo=timezone.utc)},
        "fields": ["id", "tax", {"user": ["id", "email", {"address": ["city"]}]}],
    })
    print(f"   {result.request}\n")

    print("2. Aliased mutations with variables")
    result = builder.create_mutation([
        {
            "key": f"create{i}",
            "functionName": "createCustomer",
            "fields": ["id"],
            "variables": {
                f"input{i}": {
                    "type": "CreateCustomerInput",
                    "name": "input",
                    "required": True,
                    "value": {"firstName": name},
                },
            },
        }
        for i, name in enumerate(["Ada", "Grace"], start=1)
    ])
    print(f"   {result.request}")
    print(f"   variables: {result.variables}\n")

    print("3. IR objects")
    operation = Operation(
        function_name="customer",
        fields=["id", FieldGroup("address", ["city", "state"])],
        variables={"id": VariableDeclaration(type="ID", name="id", value="c1", required=True)},
    )
    result = builder.create_query(operation)
    print(f"   {result.request}")
    print(f"   payload: {result.to_payload()}")


if __name__ == "__main__":
    main()
