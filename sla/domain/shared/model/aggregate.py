from pydantic import BaseModel


class Aggregate(BaseModel):
    """Base class for entities persisted as one blob under one key."""

    model_config = {"frozen": True, "populate_by_name": True}
