from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FieldOptions(BaseModel):
    """Options shared by every simple field type."""

    nullable: bool = Field(True, description="Whether None may be stored")
    hidden: bool = Field(False, description="Excluded from default serialization")

    model_config = ConfigDict(frozen=True, extra="forbid")


class StringOptions(FieldOptions):
    max_length: int = Field(255, gt=0, description="Maximum number of characters")


class FieldTemplate(BaseModel):
    """A field type plus construction options, stamped once per child key.

    >>> FieldTemplate(type="string", options={"max_length": 60}).type
    'string'
    """

    type: str = Field(..., min_length=1, description="Registered field type name")
    options: dict[str, Any] = Field(default_factory=dict, description="Raw construction options")

    model_config = ConfigDict(frozen=True)

    def with_options(self, **options: Any) -> "FieldTemplate":
        return FieldTemplate(type=self.type, options={**self.options, **options})
