"""Shared pydantic configuration for engine value types."""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Immutable record with snake_case attributes and camelCase wire names.

    Payloads from the LLM proposal generator and the UI use camelCase
    (``impactPoints``, ``keywordsAdded``); both spellings are accepted on input.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )

    def to_payload(self) -> dict:
        """Dump with wire names, omitting unset optional components."""
        return self.model_dump(by_alias=True, exclude_none=True)
