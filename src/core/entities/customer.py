"""Customer entity."""

from datetime import UTC, datetime

from pydantic import BaseModel, Field


class Customer(BaseModel):
    """A customer receiving quotes."""

    id: int | None = None
    name: str
    contact_person: str | None = None
    email: str | None = None
    phone: str | None = None
    address: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
