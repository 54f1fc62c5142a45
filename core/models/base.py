# =============================================================================
# core/models/base.py - Schema Base Classes
# =============================================================================
# JSON travels in camelCase ("userName", "entryDate") while Python code uses
# snake_case. Every schema inherits the alias generator from here.
#
# - CamelModel: responses and shared shapes (built from ORM rows)
# - RequestModel: request bodies; unknown fields are rejected
# =============================================================================

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

# Update schemas: a non-nullable column may be omitted, but not sent as null
NOT_NULL_MESSAGE = "may not be null"


class CamelModel(BaseModel):
    """Base schema: camelCase aliases, populated by name or alias."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class RequestModel(CamelModel):
    """Base for request bodies. An unexpected key is a validation error."""

    model_config = ConfigDict(extra="forbid")
