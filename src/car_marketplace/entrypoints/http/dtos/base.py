"""Base DTO class."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelDTO(BaseModel):
    """Response DTO serialized with camelCase keys (``body_type`` → ``bodyType``)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
