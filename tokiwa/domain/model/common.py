"""Base model for domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable domain entity.

    Changes go through ``model_copy(update=...)`` so a stored version is
    never mutated in place.
    """

    model_config = ConfigDict(frozen=True)
