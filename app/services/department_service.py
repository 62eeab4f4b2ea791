"""Department management."""

import logging
from typing import List

from sqlalchemy.exc import IntegrityError

from app.core.exceptions import BadRequestError, ConflictError, NotFoundError
from app.models.department import Department
from app.models.employee import Employee
from app.repositories.department_repository import DepartmentRepository
from app.repositories.employee_repository import EmployeeRepository
from app.schemas.department import (
    DepartmentCreate,
    DepartmentStat,
    DepartmentStatsResponse,
    DepartmentUpdate,
    TransferResponse,
    TransferredEmployee,
)

logger = logging.getLogger(__name__)


class DepartmentService:
    """CRUD, search, statistics and employee transfers for departments."""

    def __init__(self, departments: DepartmentRepository, employees: EmployeeRepository):
        self.departments = departments
        self.employees = employees

    async def list_departments(self) -> List[Department]:
        return await self.departments.get_all()

    async def get_department(self, department_id: int) -> Department:
        department = await self.departments.get_by_id(department_id)
        if department is None:
            raise NotFoundError(f"Department with ID {department_id} not found")
        return department

    async def get_by_code(self, code: str) -> Department:
        department = await self.departments.get_by_code(code)
        if department is None:
            raise NotFoundError(f"Department with code {code} not found")
        return department

    async def create_department(self, data: DepartmentCreate) -> Department:
        if await self.departments.exists(Department.code == data.code):
            raise ConflictError(f"A department with code {data.code} already exists")
        if await self.departments.exists(Department.name == data.name):
            raise ConflictError(f"A department with name {data.name} already exists")

        department = Department(
            name=data.name,
            code=data.code,
            description=data.description,
            location=data.location,
        )
        try:
            await self.departments.add(department)
        except IntegrityError:
            raise ConflictError(f"A department with code {data.code} already exists")

        logger.info(f"Created department: {department.code}")
        return await self.departments.reload(department)

    async def update_department(self, department_id: int, data: DepartmentUpdate) -> Department:
        department = await self.get_department(department_id)

        if data.code and data.code != department.code:
            if await self.departments.exists(Department.code == data.code, Department.id != department_id):
                raise ConflictError(f"A department with code {data.code} already exists")
        if data.name and data.name != department.name:
            if await self.departments.exists(Department.name == data.name, Department.id != department_id):
                raise ConflictError(f"A department with name {data.name} already exists")

        if data.name:
            department.name = data.name
        if data.code:
            department.code = data.code
        if data.description:
            department.description = data.description
        if data.location:
            department.location = data.location

        try:
            await self.departments.update(department)
        except IntegrityError:
            raise ConflictError(f"A department with code {data.code} already exists")
        return department

    async def deactivate_department(self, department_id: int) -> None:
        department = await self.get_department(department_id)
        await self.departments.deactivate(department)
        logger.info(f"Deactivated department: {department.code}")

    async def purge_department(self, department_id: int) -> None:
        """Remove permanently. Employees stay, with no department."""
        if not await self.departments.delete(department_id):
            raise NotFoundError(f"Department with ID {department_id} not found")
        logger.info(f"Purged department: {department_id}")

    async def search(self, query: str) -> List[Department]:
        if not query or not query.strip():
            raise BadRequestError("A search term is required")
        return await self.departments.search(query.strip())

    async def statistics(self) -> DepartmentStatsResponse:
        total_departments = await self.departments.count()
        total_employees = await self.employees.count()
        stats = [DepartmentStat(**row) for row in await self.departments.statistics()]

        average = round(total_employees / total_departments, 2) if total_departments else 0.0
        return DepartmentStatsResponse(
            total_departments=total_departments,
            total_employees=total_employees,
            average_employees_per_department=average,
            department_with_most_employees=stats[0] if stats else None,
            department_with_least_employees=stats[-1] if stats else None,
            all_departments=stats,
        )

    async def transfer_employees(
        self,
        from_department_id: int,
        to_department_id: int,
        employee_ids: List[int],
    ) -> TransferResponse:
        source = await self.departments.get_by_id(from_department_id)
        if source is None:
            raise NotFoundError(f"Source department with ID {from_department_id} not found")
        target = await self.departments.get_by_id(to_department_id)
        if target is None:
            raise NotFoundError(f"Target department with ID {to_department_id} not found")

        requested = set(employee_ids)
        employees: List[Employee] = await self.employees.get_many_in_department(requested, from_department_id)
        if not requested or len(employees) != len(requested):
            raise BadRequestError(
                "Some employees were not found or do not belong to the source department"
            )

        for employee in employees:
            employee.department_id = to_department_id
        await self.employees.update_range(employees)

        logger.info(f"Transferred {len(employees)} employees from {source.code} to {target.code}")
        return TransferResponse(
            message=f"{len(employees)} employees transferred successfully",
            from_department=source.name,
            to_department=target.name,
            transferred_employees=[
                TransferredEmployee(id=e.id, full_name=e.full_name) for e in employees
            ],
        )
