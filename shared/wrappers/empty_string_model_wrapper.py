import re
from enum import Enum
from typing import Any
from pydantic import BaseModel, model_validator

INVISIBLE_CHARS_PATTERN = re.compile(
    r'[\u200e\u200f\u202a-\u202e\u2066-\u2069\ufeff]')


def deep_clean(value: Any):
    """Recursively convert empty strings to None and strip invisible chars."""

    if isinstance(value, dict):
        return {k: deep_clean(v) for k, v in value.items()}

    if isinstance(value, list):
        return [deep_clean(v) for v in value]

    if isinstance(value, str):
        cleaned = INVISIBLE_CHARS_PATTERN.sub("", value).strip()
        return None if cleaned == "" else cleaned

    return value


class EmptyStringModel(BaseModel):
    """Request model that treats blank form fields as missing.

    The UI posts ``""`` for untouched optional selects (dealer, employee),
    which must reach the ledger as ``None`` rather than fail uuid parsing.
    """
    model_config = {
        "populate_by_name": True,
        "from_attributes": True,
    }

    @model_validator(mode="before")
    @classmethod
    def clean_input(cls, values):
        if isinstance(values, dict):
            return deep_clean(values)
        return values

    def column_values(self, **kwargs) -> dict:
        """model_dump() with enum members replaced by their values, ready for a Column."""
        data = self.model_dump(**kwargs)
        return {k: v.value if isinstance(v, Enum) else v for k, v in data.items()}
