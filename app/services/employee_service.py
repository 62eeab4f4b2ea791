"""Employee management."""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError

from app.core.exceptions import BadRequestError, ConflictError, NotFoundError
from app.models.employee import Employee
from app.repositories.department_repository import DepartmentRepository
from app.repositories.employee_repository import EmployeeRepository
from app.schemas.employee import EmployeeCreate, EmployeeStatsResponse, EmployeeUpdate

logger = logging.getLogger(__name__)


class EmployeeService:
    """CRUD, search and statistics for employees."""

    def __init__(self, employees: EmployeeRepository, departments: DepartmentRepository):
        self.employees = employees
        self.departments = departments

    async def list_employees(self) -> List[Employee]:
        return await self.employees.list_active()

    async def get_employee(self, employee_id: int) -> Employee:
        employee = await self.employees.get_by_id(employee_id)
        if employee is None:
            raise NotFoundError(f"Employee with ID {employee_id} not found")
        return employee

    async def list_by_department(self, department_id: int) -> List[Employee]:
        if await self.departments.get_by_id(department_id) is None:
            raise NotFoundError(f"Department with ID {department_id} not found")
        return await self.employees.get_by_department(department_id)

    async def _ensure_department(self, department_id) -> None:
        if department_id is not None and await self.departments.get_by_id(department_id) is None:
            raise BadRequestError(f"Department with ID {department_id} not found")

    async def create_employee(self, data: EmployeeCreate) -> Employee:
        if await self.employees.exists(Employee.email == data.email):
            raise ConflictError("Email already registered")
        await self._ensure_department(data.department_id)

        employee = Employee(
            first_name=data.first_name,
            last_name=data.last_name,
            email=data.email,
            phone_number=data.phone_number,
            hire_date=data.hire_date,
            position=data.position,
            salary=data.salary,
            department_id=data.department_id,
            is_active=True,
        )
        try:
            await self.employees.add(employee)
        except IntegrityError:
            raise ConflictError("Email already registered")

        logger.info(f"Created employee: {employee.id}")
        return await self.employees.reload(employee)

    async def update_employee(self, employee_id: int, data: EmployeeUpdate) -> Employee:
        employee = await self.get_employee(employee_id)

        if data.email and data.email != employee.email:
            if await self.employees.exists(Employee.email == data.email, Employee.id != employee_id):
                raise ConflictError("Email already registered")
        await self._ensure_department(data.department_id)

        if data.first_name:
            employee.first_name = data.first_name
        if data.last_name:
            employee.last_name = data.last_name
        if data.email:
            employee.email = data.email
        if data.phone_number:
            employee.phone_number = data.phone_number
        if data.hire_date is not None:
            employee.hire_date = data.hire_date
        if data.position:
            employee.position = data.position
        if data.salary is not None:
            employee.salary = data.salary
        if data.department_id is not None:
            employee.department_id = data.department_id

        try:
            await self.employees.update(employee)
        except IntegrityError:
            raise ConflictError("Email already registered")
        return await self.employees.reload(employee)

    async def deactivate_employee(self, employee_id: int) -> None:
        employee = await self.get_employee(employee_id)
        await self.employees.deactivate(employee)
        logger.info(f"Deactivated employee: {employee_id}")

    async def purge_employee(self, employee_id: int) -> None:
        """Remove permanently; dependents go with the employee."""
        if not await self.employees.delete(employee_id):
            raise NotFoundError(f"Employee with ID {employee_id} not found")
        logger.info(f"Purged employee: {employee_id}")

    async def search(self, query: str) -> List[Employee]:
        if not query or not query.strip():
            raise BadRequestError("A search term is required")
        return await self.employees.search(query.strip())

    async def statistics(self) -> EmployeeStatsResponse:
        return EmployeeStatsResponse(**await self.employees.statistics())
