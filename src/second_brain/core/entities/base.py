"""Base record shared by every stored entity."""

from collections.abc import Mapping
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from second_brain.core.exceptions import ValidationError


class BaseRecord(BaseModel):
    """
    Flat record with a client-generated identifier.

    Attributes are snake_case in Python and camelCase on the wire
    (``tag_ids`` <-> ``tagIds``). Unknown wire keys are ignored.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    id: str = Field(..., min_length=1)

    def to_wire(self) -> dict[str, Any]:
        """Serialize to the camelCase JSON shape the UI consumes."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    @classmethod
    def field_name(cls, key: str) -> str | None:
        """Map a wire key or attribute name to the attribute name."""
        if key in cls.model_fields:
            return key
        for name, info in cls.model_fields.items():
            if info.alias == key:
                return name
        return None

    @classmethod
    def validate_fields(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        """
        Validate a partial payload field by field.

        Args:
            data: Mapping keyed by wire aliases or attribute names

        Returns:
            Attribute name -> validated value, unknown keys dropped

        Raises:
            ValidationError: If any supplied value is invalid for its field
        """
        fields: dict[str, Any] = {}
        for key, value in data.items():
            name = cls.field_name(key)
            if name is None:
                continue
            info = cls.model_fields[name]
            annotation = (
                Annotated[(info.annotation, *info.metadata)]
                if info.metadata
                else info.annotation
            )
            try:
                fields[name] = TypeAdapter(annotation).validate_python(value)
            except PydanticValidationError as e:
                raise ValidationError(key, e.errors()[0]["msg"], value) from e
        return fields
