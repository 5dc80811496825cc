"""
ReqRes API payload types using Pydantic models.
"""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

T = TypeVar("T")


class User(BaseModel):
    """A user as published by the remote API."""

    model_config = ConfigDict(frozen=True)

    id: int
    email: str = ""
    first_name: str = ""
    last_name: str = ""
    avatar: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class PaginatedResponse(BaseModel, Generic[T]):
    """Envelope for one page of a collection endpoint."""

    model_config = ConfigDict(frozen=True)

    page: int
    per_page: int
    total: int
    total_pages: int
    data: list[T] = Field(default_factory=list)


class SingleEntityResponse(BaseModel, Generic[T]):
    """Envelope for a single resource. ``data`` is None when the resource is absent."""

    model_config = ConfigDict(frozen=True)

    data: T | None = None


UserResponse = SingleEntityResponse[User]
UserPage = PaginatedResponse[User]
