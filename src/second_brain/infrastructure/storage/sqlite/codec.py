"""
Conversion between records and SQLite rows.

Structured values (lists, mappings) are stored as JSON text, boolean
flags as 0/1 integers, instants as ISO-8601 text and enums by value.
"""

import json
import types
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Union, get_args, get_origin

from pydantic import ValidationError as PydanticValidationError

from second_brain.core.entities import BaseRecord, EntityType
from second_brain.core.exceptions import CorruptRecordError, ValidationError


class FieldKind(str, Enum):
    """Storage representation of a record field."""

    SCALAR = "scalar"
    STRUCTURED = "structured"
    FLAG = "flag"
    INSTANT = "instant"
    ENUM = "enum"


def classify(annotation: Any) -> FieldKind:
    """Pick the storage representation for a field annotation."""
    origin = get_origin(annotation)
    if origin in (Union, types.UnionType):
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            return classify(args[0])
        return FieldKind.SCALAR

    if origin in (list, dict, tuple, set) or annotation in (list, dict, tuple, set):
        return FieldKind.STRUCTURED
    if annotation is bool:
        return FieldKind.FLAG
    if annotation is datetime:
        return FieldKind.INSTANT
    if isinstance(annotation, type) and issubclass(annotation, Enum):
        return FieldKind.ENUM
    return FieldKind.SCALAR


@dataclass(frozen=True)
class RecordSchema:
    """Column layout of one collection."""

    entity_type: EntityType
    fields: dict[str, FieldKind]

    @classmethod
    def for_type(cls, entity_type: EntityType) -> "RecordSchema":
        record_class = entity_type.record_class
        return cls(
            entity_type=entity_type,
            fields={
                name: classify(info.annotation)
                for name, info in record_class.model_fields.items()
            },
        )

    @property
    def columns(self) -> list[str]:
        return list(self.fields)


class EntityCodec:
    """Encode records to rows and decode rows back to records."""

    def __init__(self) -> None:
        self._schemas = {t: RecordSchema.for_type(t) for t in EntityType}

    def schema(self, entity_type: EntityType) -> RecordSchema:
        return self._schemas[entity_type]

    def encode(self, entity_type: EntityType, record: BaseRecord) -> dict[str, Any]:
        """Encode a full record to a column -> value row."""
        record_class = entity_type.record_class
        if not isinstance(record, record_class):
            raise ValidationError(
                "record",
                f"expected {record_class.__name__} for {entity_type.value}",
                type(record).__name__,
            )
        schema = self.schema(entity_type)
        return self.encode_fields(
            entity_type, {name: getattr(record, name) for name in schema.fields}
        )

    def encode_fields(self, entity_type: EntityType, fields: Mapping[str, Any]) -> dict[str, Any]:
        """Encode a partial attribute -> value mapping."""
        schema = self.schema(entity_type)
        row: dict[str, Any] = {}
        for name, value in fields.items():
            kind = schema.fields.get(name)
            if kind is None:
                raise ValidationError(name, f"unknown field for {entity_type.value}")
            row[name] = _encode_value(kind, value)
        return row

    def decode(self, entity_type: EntityType, row: Mapping[str, Any]) -> BaseRecord:
        """
        Decode a stored row.

        Raises:
            CorruptRecordError: If structured text does not parse or the row
                does not validate against the record schema
        """
        schema = self.schema(entity_type)
        record_id = row.get("id")
        data: dict[str, Any] = {}

        for name, kind in schema.fields.items():
            value = row.get(name)
            if value is None:
                # Absent optional columns fall back to model defaults
                continue
            if kind is FieldKind.STRUCTURED:
                try:
                    value = json.loads(value)
                except (json.JSONDecodeError, TypeError) as e:
                    raise CorruptRecordError(
                        entity_type.value, record_id, f"{name}: {e}"
                    ) from e
            elif kind is FieldKind.FLAG:
                value = bool(value)
            data[name] = value

        try:
            return entity_type.record_class.model_validate(data)
        except PydanticValidationError as e:
            raise CorruptRecordError(entity_type.value, record_id, str(e)) from e


def _encode_value(kind: FieldKind, value: Any) -> Any:
    if value is None:
        return None
    if kind is FieldKind.STRUCTURED:
        return json.dumps(value)
    if kind is FieldKind.FLAG:
        return 1 if value else 0
    if kind is FieldKind.INSTANT:
        return value.isoformat()
    if kind is FieldKind.ENUM:
        return value.value if isinstance(value, Enum) else value
    return value
