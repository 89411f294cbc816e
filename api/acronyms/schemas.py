"""
Acronym schemas.

Wire names are `id`, `short`, `long` and `userID`; the Python side uses
`user_id` and serialises by alias.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class AcronymPayload(BaseModel):
    """
    Create/update body. The id is never taken from the client.
    """

    model_config = ConfigDict(populate_by_name=True)

    short: str = Field(..., min_length=1)
    long: str = Field(..., min_length=1)
    user_id: int = Field(..., alias="userID")


class Acronym(AcronymPayload):
    id: int | None = None

    @classmethod
    def from_row(cls, row: dict) -> "Acronym":
        return cls(
            id=int(row["id"]),
            short=str(row["short"]),
            long=str(row["long"]),
            user_id=int(row["user_id"]),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Acronym):
            return NotImplemented
        if self.id is not None and other.id is not None:
            return self.id == other.id
        return super().__eq__(other)

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.id))
