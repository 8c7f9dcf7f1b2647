"""
Shared pydantic base for wire-facing records.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake_case attributes, camelCase on the wire.

    The generative backend is prompted for camelCase keys (``keyPoints``,
    ``simplifiedClauses``) and the HTTP layer returns the same shape, so both
    spellings are accepted on input.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class FrozenCamelModel(CamelModel):
    """Immutable variant; attaching values goes through ``model_copy``."""

    model_config = ConfigDict(frozen=True)
