"""Shared pydantic base for models that travel over the wire."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """Immutable model serialized with camelCase keys.

    Python code uses snake_case attribute names; JSON payloads use the
    camelCase aliases. Both are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )
