"""Request Schemas: strict Pydantic types for write bodies and raw queries.

Invariants:
    - Record values are scalars only: null, bool, int, float, str (nested JSON rejected)
    - Strict types: no silent coercion ("1" stays a string, true stays a bool)
    - QueryRequest.query is optional here; emptiness is a 400 raised by the builder

Design Decisions:
    - StrictBool listed before StrictInt: bool is an int subclass in Python
    - Records stay plain dicts (not models): column names are caller data, not fields
"""

from typing import Annotated, Union

from pydantic import BaseModel, Field, StrictBool, StrictFloat, StrictInt, StrictStr

ScalarValue = Annotated[
    Union[StrictBool, StrictInt, StrictFloat, StrictStr, None],
    Field(union_mode="left_to_right"),
]

RecordBody = dict[str, ScalarValue]


class QueryRequest(BaseModel):
    """Raw query escape hatch: SQL text plus ordered bind parameters."""
    query: str | None = None
    params: list[ScalarValue] | None = None
