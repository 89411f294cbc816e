"""
User schemas.
"""

from __future__ import annotations

from pydantic import BaseModel, Field


class UserPayload(BaseModel):
    name: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)


class User(BaseModel):
    id: int
    name: str
    username: str

    @classmethod
    def from_row(cls, row: dict) -> "User":
        return cls(id=int(row["id"]), name=str(row["name"]), username=str(row["username"]))
