from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel


@dataclass(frozen=True)
class JsonNamingPolicy:
    """Field naming applied to JSON exchanged with the upstream API.

    With the defaults, the first letter of every field name is lower-cased and
    nothing else is touched: ``UserId`` becomes ``userId`` and ``userId`` is
    left alone.
    """

    lower_first_letter: bool = True
    recursive: bool = True

    def convert_name(self, name: str) -> str:
        if not self.lower_first_letter or not name:
            return name
        return name[0].lower() + name[1:]

    def apply(self, payload: Any) -> Any:
        if isinstance(payload, dict):
            return {
                self.convert_name(key) if isinstance(key, str) else key: (
                    self.apply(value) if self.recursive else value
                )
                for key, value in payload.items()
            }
        if isinstance(payload, list) and self.recursive:
            return [self.apply(item) for item in payload]
        return payload


DEFAULT_NAMING_POLICY = JsonNamingPolicy()


class WireModel(BaseModel):
    """Base for payloads whose JSON names follow ``DEFAULT_NAMING_POLICY``."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="before")
    @classmethod
    def normalize_field_names(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return DEFAULT_NAMING_POLICY.apply(data)
        return data

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
