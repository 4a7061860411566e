"""Reusable pydantic base models for configuration records."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """
    A base model that converts field names to camel case when serializing.

    For example, the field name `idle_timeout` in a Python model will be
    represented as `idleTimeout` when it is serialized to JSON.

    Assignments are validated, so a record mutated in place during loading
    can never hold a value of the wrong type.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_default=True,
        validate_assignment=True,
        arbitrary_types_allowed=True,
        extra="forbid",
    )


class StrictBaseModel(CamelModel):
    """A strict, immutable pydantic base model."""

    model_config = CamelModel.model_config | {
        "frozen": True,
        "strict": True,
    }
