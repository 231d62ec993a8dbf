"""Base schema configuration."""

from pydantic import BaseModel, ConfigDict


class ORMModel(BaseModel):
    """Base model with ORM compatibility."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)
