"""Base model configuration for catalog and configuration data."""

from pydantic import BaseModel, ConfigDict


class Model(BaseModel):
    """Frozen base model, instances are shared between states and never mutated."""

    model_config = ConfigDict(frozen=True, extra="forbid")
