"""Machine type and employee SQLModels."""

from datetime import datetime

from pydantic import BaseModel, field_validator, model_validator
from pydantic import Field as SchemaField
from sqlmodel import Field, SQLModel
from typing_extensions import Self

from .base import FieldType, utcnow


class MachineFieldSchema(BaseModel):
    """One entry of a machine type's custom field schema."""

    name: str = SchemaField(min_length=1, max_length=50)
    label: str = SchemaField(min_length=1, max_length=100)
    type: FieldType = FieldType.TEXT
    required: bool = False
    options: list[str] | None = None

    @model_validator(mode="after")
    def _select_needs_options(self) -> Self:
        if self.type == FieldType.SELECT and not self.options:
            raise ValueError(f"Select field '{self.name}' needs at least one option")
        return self


class MachineTypeBase(SQLModel):
    """Base machine type fields."""

    name: str = Field(min_length=1, max_length=100)
    model: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=500)


class MachineType(MachineTypeBase, table=True):
    """
    MachineType table model.

    custom_fields_schema holds the JSON-encoded ordered list of
    MachineFieldSchema entries used to render and check machine entries.
    """

    __tablename__ = "machine_types"

    id: int | None = Field(default=None, primary_key=True)
    custom_fields_schema: str = Field(default="[]")


class MachineTypeCreate(MachineTypeBase):
    custom_fields_schema: list[MachineFieldSchema] = Field(default_factory=list)

    @field_validator("custom_fields_schema")
    @classmethod
    def _unique_field_names(
        cls, v: list[MachineFieldSchema]
    ) -> list[MachineFieldSchema]:
        names = [f.name for f in v]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise ValueError(f"Duplicate field names: {', '.join(duplicates)}")
        return v


class MachineTypeUpdate(SQLModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    model: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=500)
    custom_fields_schema: list[MachineFieldSchema] | None = None


class MachineTypeRead(MachineTypeBase):
    id: int
    custom_fields_schema: list[MachineFieldSchema]


class EmployeeBase(SQLModel):
    """Base employee fields."""

    name: str = Field(min_length=1, max_length=100)
    phone: str | None = Field(default=None, max_length=50)
    machine_type_id: int | None = Field(
        default=None, foreign_key="machine_types.id", ondelete="SET NULL"
    )


class Employee(EmployeeBase, table=True):
    """Employee table model, optionally tied to the machine type they run."""

    __tablename__ = "employees"

    id: int | None = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utcnow)


class EmployeeCreate(EmployeeBase):
    pass


class EmployeeUpdate(SQLModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    phone: str | None = Field(default=None, max_length=50)
    machine_type_id: int | None = None


class EmployeeRead(EmployeeBase):
    id: int
    created_at: datetime
    machine_type_name: str | None = None
