"""Base model for all domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Base class for all domain models.

    Entities are immutable: every change produces a new instance through
    ``model_copy(update=...)`` which is then saved whole. Readers holding an
    older instance keep a consistent snapshot.
    """

    model_config = ConfigDict(frozen=True)
