"""
DTO Base
========

Shared configuration for the HTTP schemas: camelCase on the wire,
snake_case in Python, unknown fields rejected.
"""
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base class for request and response DTOs."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        extra="forbid",
    )
