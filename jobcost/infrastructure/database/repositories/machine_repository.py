"""Machine type and employee repositories."""

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import select

from jobcost.models import (
    Employee,
    EmployeeCreate,
    EmployeeRead,
    EmployeeUpdate,
    MachineType,
    MachineTypeCreate,
    MachineTypeUpdate,
)

from .base import BaseRepository, DatabaseError


class MachineTypeRepository(
    BaseRepository[MachineType, MachineTypeCreate, MachineTypeUpdate]
):
    @property
    def entity_class(self) -> type[MachineType]:
        return MachineType

    def list_by_name(self) -> list[MachineType]:
        return self.get_all(order_by=(MachineType.name, MachineType.id))


class EmployeeRepository(BaseRepository[Employee, EmployeeCreate, EmployeeUpdate]):
    @property
    def entity_class(self) -> type[Employee]:
        return Employee

    def list_with_machine_type(self) -> list[EmployeeRead]:
        """Employees ordered by name, with the name of the machine type they run."""
        try:
            statement = (
                select(Employee, MachineType.name)
                .outerjoin(MachineType, Employee.machine_type_id == MachineType.id)
                .order_by(Employee.name, Employee.id)
            )
            rows = self.session.exec(statement).all()
        except SQLAlchemyError as e:
            raise DatabaseError(
                f"Database error during employee listing: {str(e)}"
            ) from e

        return [
            EmployeeRead.model_validate(
                employee, update={"machine_type_name": machine_type_name}
            )
            for employee, machine_type_name in rows
        ]

    def get_read(self, employee_id: int) -> EmployeeRead:
        employee = self.get_by_id_required(employee_id)
        machine_type = (
            self.session.get(MachineType, employee.machine_type_id)
            if employee.machine_type_id
            else None
        )
        return EmployeeRead.model_validate(
            employee,
            update={"machine_type_name": machine_type.name if machine_type else None},
        )
