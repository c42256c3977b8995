"""
Shared base for request/response schemas.

Follows Layer 3 rules:
- ALWAYS use Pydantic models for request/response
- JSON keys are camelCase on the wire, snake_case in Python
"""
from __future__ import annotations
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ApiResponse(ApiModel):
    """Generic outcome envelope used by every command endpoint."""
    success: bool
    message: str = ""
