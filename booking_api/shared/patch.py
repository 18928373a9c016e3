"""
Partial update helpers.

A field of an update payload is in one of three states:

* absent        - the caller did not send it; the stored value is untouched
* explicit null - the caller sent ``null``; optional fields are cleared
* value         - the caller sent a value; it replaces the stored one

Pydantic records which fields were actually sent in ``model_fields_set``,
which is what tells "absent" apart from "explicit null".
"""

from typing import Any

from pydantic import BaseModel

from ..exceptions import ValidationError


class _Absent:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT: Any = _Absent()


def field_state(model: BaseModel, name: str) -> Any:
    """Return ABSENT when ``name`` was not sent, otherwise the sent value (possibly None)."""
    if name not in model.model_fields_set:
        return ABSENT
    return getattr(model, name)


def sent_fields(model: BaseModel) -> dict[str, Any]:
    """All fields the caller actually sent, explicit nulls included."""
    return {name: getattr(model, name) for name in model.model_fields_set}


def to_column_updates(
    fields: dict[str, Any], columns: dict[str, str], nullable: frozenset = frozenset()
) -> dict[str, Any]:
    """
    Map sent request fields to column values.

    Raises:
        ValidationError: A non-nullable field was sent as null
    """
    updates = {}
    for name, value in fields.items():
        if value is None and name not in nullable:
            raise ValidationError(f"{name} cannot be null")
        updates[columns[name]] = value
    return updates
