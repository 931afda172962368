"""
Base Pydantic schemas.

This module contains base schemas with common configuration that other
schemas can inherit from.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.

    Row schemas inherit from this class and keep the column names as keys.
    """

    model_config = ConfigDict(from_attributes=True)


class CamelSchema(BaseModel):
    """
    Base schema for response envelopes.

    Attributes are snake_case in Python and camelCase on the wire.
    """

    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )


class ErrorResponse(BaseModel):
    """Error envelope returned for client and query failures."""

    error: str
    details: Optional[str] = None
