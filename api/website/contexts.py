"""
View contexts handed to the templates.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from acronyms.schemas import Acronym
from users.schemas import User


class IndexContext(BaseModel):
    title: str = "Homepage"
    # None (not []) tells the template there is nothing to list.
    acronyms: list[Acronym] | None = None


class AcronymContext(BaseModel):
    title: str
    acronym: Acronym
    user: User | None = None


class CreateAcronymContext(BaseModel):
    title: str = "Create An Acronym"
    users: list[User] = Field(default_factory=list)


class EditAcronymContext(BaseModel):
    title: str = "Edit Acronym"
    acronym: Acronym
    editing: bool = True
    users: list[User] = Field(default_factory=list)


class ErrorContext(BaseModel):
    title: str
    status_code: int
    detail: str = ""
