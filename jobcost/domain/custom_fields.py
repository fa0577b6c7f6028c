"""
Machine custom field schemas.

A machine type carries a JSON list of field descriptors. The list is data,
interpreted here to check the values recorded on a machine entry and to
describe them in reports.
"""

import json
from collections.abc import Mapping, Sequence
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from jobcost.core.exceptions import ValidationError
from jobcost.models.base import FieldType
from jobcost.models.machine import MachineFieldSchema

_schema_adapter = TypeAdapter(list[MachineFieldSchema])


def parse_schema(raw: str | Sequence[Any]) -> list[MachineFieldSchema]:
    """Parse a stored schema (JSON text or already-decoded list)."""
    try:
        data = json.loads(raw) if isinstance(raw, str) else list(raw)
        return _schema_adapter.validate_python(data)
    except (json.JSONDecodeError, PydanticValidationError) as e:
        raise ValidationError(
            "custom_fields_schema", None, f"Invalid custom field schema: {e}"
        ) from e


def dump_schema(fields: Sequence[MachineFieldSchema]) -> str:
    return json.dumps([f.model_dump(exclude_none=True, mode="json") for f in fields])


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _is_number(value: Any) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, int | float | Decimal):
        return True
    if isinstance(value, str):
        try:
            return Decimal(value.strip()).is_finite()
        except InvalidOperation:
            return False
    return False


def validate_custom_data(
    fields: Sequence[MachineFieldSchema], data: Mapping[str, Any]
) -> dict[str, Any]:
    """
    Check entry values against a machine type's field schema.

    Required fields must be present and non-blank, number fields numeric, and
    select fields one of their options. Keys not in the schema are kept.
    """
    for spec in fields:
        value = data.get(spec.name)
        if _is_blank(value):
            if spec.required:
                raise ValidationError(
                    f"machine_custom_data.{spec.name}",
                    None,
                    f"{spec.label} is required",
                )
            continue
        if spec.type == FieldType.NUMBER and not _is_number(value):
            raise ValidationError(
                f"machine_custom_data.{spec.name}",
                str(value),
                f"{spec.label} must be a number",
            )
        if spec.type == FieldType.SELECT and str(value) not in (spec.options or []):
            raise ValidationError(
                f"machine_custom_data.{spec.name}",
                str(value),
                f"{spec.label} must be one of: {', '.join(spec.options or [])}",
            )
    return dict(data)


def parse_custom_data(raw: str | None) -> dict[str, Any]:
    if not raw:
        return {}
    try:
        value = json.loads(raw)
    except json.JSONDecodeError:
        return {}
    return value if isinstance(value, dict) else {}

