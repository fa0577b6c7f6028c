"""
Machine type and employee application services.

Machine types own a custom field schema; MachineService parses it for
readers and checks entry data against it for the job service.
"""

from typing import Any

from jobcost.core.observability import get_logger
from jobcost.domain.custom_fields import dump_schema, parse_schema, validate_custom_data
from jobcost.infrastructure.database.repositories import (
    EmployeeRepository,
    MachineTypeRepository,
)
from jobcost.models import (
    EmployeeCreate,
    EmployeeRead,
    EmployeeUpdate,
    MachineFieldSchema,
    MachineType,
    MachineTypeCreate,
    MachineTypeRead,
    MachineTypeUpdate,
)

from .base_service import ApplicationServiceBase

logger = get_logger(__name__)


def _to_read(machine_type: MachineType) -> MachineTypeRead:
    return MachineTypeRead.model_validate(
        machine_type,
        update={"custom_fields_schema": parse_schema(machine_type.custom_fields_schema)},
    )


class MachineService(ApplicationServiceBase):
    def __init__(self, machine_type_repository: MachineTypeRepository):
        self._machine_types = machine_type_repository

    def list_machine_types(self) -> list[MachineTypeRead]:
        return [_to_read(mt) for mt in self._machine_types.list_by_name()]

    def get_machine_type(self, machine_type_id: int) -> MachineTypeRead:
        return _to_read(self._machine_types.get_by_id_required(machine_type_id))

    def create_machine_type(self, request: MachineTypeCreate) -> MachineTypeRead:
        machine_type = MachineType(
            name=self.validate_non_empty_string(request.name, "name"),
            model=request.model,
            description=request.description,
            custom_fields_schema=dump_schema(request.custom_fields_schema),
        )
        machine_type = self._machine_types.save(machine_type)
        logger.info(
            "Machine type created",
            machine_type_id=machine_type.id,
            field_count=len(request.custom_fields_schema),
        )
        return _to_read(machine_type)

    def update_machine_type(
        self, machine_type_id: int, request: MachineTypeUpdate
    ) -> MachineTypeRead:
        changes = request.model_dump(exclude_unset=True)
        if "name" in changes:
            changes["name"] = self.validate_non_empty_string(changes["name"], "name")
        if request.custom_fields_schema is not None:
            changes["custom_fields_schema"] = dump_schema(request.custom_fields_schema)
        else:
            changes.pop("custom_fields_schema", None)
        return _to_read(self._machine_types.update(machine_type_id, changes))

    def delete_machine_type(self, machine_type_id: int) -> None:
        if not self._machine_types.delete(machine_type_id):
            raise self.entity_not_found_error("MachineType", machine_type_id)

    def get_schema(self, machine_type_id: int) -> list[MachineFieldSchema]:
        """Parsed custom field schema of a machine type."""
        machine_type = self._machine_types.get_by_id_required(machine_type_id)
        return parse_schema(machine_type.custom_fields_schema)

    def validate_custom_data(
        self, machine_type_id: int, data: dict[str, Any]
    ) -> dict[str, Any]:
        """
        Check machine entry data against the machine type's schema.

        Raises:
            EntityNotFoundError: If the machine type does not exist
            ValidationError: If a value does not satisfy its field
        """
        return validate_custom_data(self.get_schema(machine_type_id), data)


class EmployeeService(ApplicationServiceBase):
    def __init__(
        self,
        employee_repository: EmployeeRepository,
        machine_type_repository: MachineTypeRepository,
    ):
        self._employees = employee_repository
        self._machine_types = machine_type_repository

    def list_employees(self) -> list[EmployeeRead]:
        return self._employees.list_with_machine_type()

    def get_employee(self, employee_id: int) -> EmployeeRead:
        return self._employees.get_read(employee_id)

    def create_employee(self, request: EmployeeCreate) -> EmployeeRead:
        self.validate_non_empty_string(request.name, "name")
        self.validate_reference(
            self._machine_types, request.machine_type_id, "machine_type_id"
        )
        employee = self._employees.create(request)
        return self._employees.get_read(employee.id)

    def update_employee(self, employee_id: int, request: EmployeeUpdate) -> EmployeeRead:
        changes = request.model_dump(exclude_unset=True)
        if "name" in changes:
            changes["name"] = self.validate_non_empty_string(changes["name"], "name")
        if changes.get("machine_type_id") is not None:
            self.validate_reference(
                self._machine_types, changes["machine_type_id"], "machine_type_id"
            )
        self._employees.update(employee_id, changes)
        return self._employees.get_read(employee_id)

    def delete_employee(self, employee_id: int) -> None:
        if not self._employees.delete(employee_id):
            raise self.entity_not_found_error("Employee", employee_id)
