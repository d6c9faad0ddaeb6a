from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for everything crossing the service boundary: camelCase on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class RecordBase(CamelModel):
    """Base for plain records exchanged with the host application.

    Records are immutable. Numeric ids are accepted and stored as strings.
    """

    model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True, extra="ignore")

    def to_wire(self) -> dict[str, object]:
        """Dump the record using its camelCase field names."""
        return self.model_dump(mode="json", by_alias=True)
