"""Shared configuration for API schemas."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Schema exchanged as camelCase JSON; fields may also be populated by name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)
