"""Configuration models using Pydantic."""

from pydantic import BaseModel, ConfigDict


class TickoffConfig(BaseModel):
    """Root configuration model."""

    model_config = ConfigDict(extra="ignore")

    # Snapshot the store file before `reset` clears it
    backup_on_reset: bool = True
