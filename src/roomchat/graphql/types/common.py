"""
Shared GraphQL enums and input helpers
"""

import dataclasses
from enum import Enum
from typing import Any

import strawberry
from strawberry.utils.str_converters import to_camel_case


@strawberry.enum
class ModelSortDirection(Enum):
    """Sort direction for range queries."""

    ASC = "ASC"
    DESC = "DESC"


def input_to_item(value: Any) -> dict[str, Any]:
    """Convert a Strawberry input object into a store item.

    Fields the caller did not send are left out entirely so server-side
    defaults apply to them. Keys use the GraphQL (camelCase) field names.
    """
    item: dict[str, Any] = {}
    for field in dataclasses.fields(value):
        field_value = getattr(value, field.name)
        if field_value is strawberry.UNSET:
            continue
        item[to_camel_case(field.name)] = field_value
    return item
