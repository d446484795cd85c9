"""Base class for value objects."""

from pydantic import BaseModel, ConfigDict


class ValueObject(BaseModel):
    """Immutable value compared field by field.

    Unknown fields are ignored so provider payloads can be passed through
    without pre-filtering.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")
