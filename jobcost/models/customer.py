"""Customer SQLModel."""

from datetime import datetime

from pydantic import field_validator
from sqlmodel import Field, SQLModel

from .base import utcnow


class CustomerBase(SQLModel):
    """Base customer fields."""

    name: str = Field(min_length=1, max_length=200, index=True)
    phone: str | None = Field(default=None, max_length=50)
    address: str | None = Field(default=None, max_length=500)

    @field_validator("name")
    @classmethod
    def _name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Customer name is required")
        return v.strip()


class Customer(CustomerBase, table=True):
    """Customer table model."""

    __tablename__ = "customers"

    id: int | None = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utcnow)


class CustomerCreate(CustomerBase):
    pass


class CustomerUpdate(SQLModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    phone: str | None = Field(default=None, max_length=50)
    address: str | None = Field(default=None, max_length=500)


class CustomerRead(CustomerBase):
    id: int
    created_at: datetime
