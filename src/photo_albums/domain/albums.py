"""Album domain models."""

from pydantic import BaseModel, ConfigDict, Field


class Album(BaseModel):
    """Album as reported by the photo service."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    name: str
    owner_id: int = Field(alias="ownerId")
