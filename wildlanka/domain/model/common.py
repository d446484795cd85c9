"""Base model for domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable domain entity.

    Changes are made with ``model_copy(update=...)``, which returns a new
    instance and leaves the original untouched.
    """

    model_config = ConfigDict(frozen=True)
