"""Dependent management."""

import logging
from typing import List

from app.core.exceptions import BadRequestError, NotFoundError
from app.models.dependent import Dependent
from app.models.employee import Employee
from app.repositories.dependent_repository import DependentRepository
from app.repositories.employee_repository import EmployeeRepository
from app.schemas.dependent import DependentCreate, DependentUpdate

logger = logging.getLogger(__name__)


class DependentService:
    def __init__(self, dependents: DependentRepository, employees: EmployeeRepository):
        self.dependents = dependents
        self.employees = employees

    async def list_dependents(self) -> List[Dependent]:
        return await self.dependents.get_all()

    async def get_dependent(self, dependent_id: int) -> Dependent:
        dependent = await self.dependents.get_by_id(dependent_id)
        if dependent is None:
            raise NotFoundError(f"Dependent with ID {dependent_id} not found")
        return dependent

    async def list_by_employee(self, employee_id: int) -> List[Dependent]:
        if not await self.employees.exists(Employee.id == employee_id):
            raise NotFoundError(f"Employee with ID {employee_id} not found")
        return await self.dependents.get_active_by_employee_id(employee_id)

    async def count_by_employee(self, employee_id: int) -> int:
        return await self.dependents.count_by_employee_id(employee_id)

    async def create_dependent(self, data: DependentCreate) -> Dependent:
        if not await self.employees.exists(Employee.id == data.employee_id):
            raise BadRequestError(f"Employee with ID {data.employee_id} not found")

        dependent = Dependent(
            first_name=data.first_name,
            last_name=data.last_name,
            date_of_birth=data.date_of_birth,
            relationship=data.relationship,
            gender=data.gender,
            identification_number=data.identification_number,
            employee_id=data.employee_id,
            is_active=True,
        )
        await self.dependents.add(dependent)
        logger.info(f"Created dependent {dependent.id} for employee {dependent.employee_id}")
        return await self.dependents.reload(dependent)

    async def update_dependent(self, dependent_id: int, data: DependentUpdate) -> Dependent:
        dependent = await self.get_dependent(dependent_id)

        if data.first_name:
            dependent.first_name = data.first_name
        if data.last_name:
            dependent.last_name = data.last_name
        if data.date_of_birth is not None:
            dependent.date_of_birth = data.date_of_birth
        if data.relationship:
            dependent.relationship = data.relationship
        if data.gender:
            dependent.gender = data.gender
        if data.identification_number:
            dependent.identification_number = data.identification_number

        return await self.dependents.update(dependent)

    async def deactivate_dependent(self, dependent_id: int) -> None:
        dependent = await self.get_dependent(dependent_id)
        await self.dependents.deactivate(dependent)

    async def purge_dependent(self, dependent_id: int) -> None:
        if not await self.dependents.delete(dependent_id):
            raise NotFoundError(f"Dependent with ID {dependent_id} not found")
        logger.info(f"Purged dependent: {dependent_id}")
