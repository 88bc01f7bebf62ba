"""Pydantic DTOs (Data Transfer Objects) for the Client feature.

Inputs carry business fields only. Keys such as ``id``, ``created_at`` or
``deleted`` sent by a caller are ignored; the lifecycle service owns them.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ClientCreate(BaseModel):
    """Schema for creating a new client.

    Presence and range rules are enforced by the lifecycle service so the
    error names the field the same way on every path.
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = Field(None, examples=["Maria Santos"])
    address: str | None = Field(None, examples=["Av. Paulista, 1000"])
    age: int | None = Field(None, examples=[28])
    phone: str | None = Field(None, examples=["(11) 91234-5678"])


class ClientUpdate(ClientCreate):
    """Schema for replacing the business fields of an existing client."""


class ClientListItem(BaseModel):
    """Minimal projection used by listings and returned on create."""

    id: int
    name: str
    phone: str | None

    model_config = ConfigDict(from_attributes=True)


class ClientDetail(BaseModel):
    """Full projection: business fields plus audit timestamps, never the deletion flag."""

    id: int
    name: str
    address: str | None
    age: int | None
    phone: str | None
    created_at: datetime
    last_modified_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ClientAdminView(ClientDetail):
    """Administrative projection — the only one that exposes ``deleted``."""

    deleted: bool


class ClientPage(BaseModel):
    """One page of the client listing."""

    items: list[ClientListItem]
    total: int
    page: int
    page_size: int
