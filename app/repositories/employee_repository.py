"""Employee data access with department and dependents eagerly loaded."""

from decimal import Decimal
from typing import Iterable, List

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import selectinload

from app.models.department import Department
from app.models.dependent import Dependent
from app.models.employee import Employee
from app.repositories.base import Repository


class EmployeeRepository(Repository[Employee]):
    model = Employee

    def _select(self) -> Select:
        return select(Employee).options(
            selectinload(Employee.department),
            selectinload(Employee.dependents),
        )

    async def list_active(self) -> List[Employee]:
        return await self.find(Employee.is_active.is_(True))

    async def get_by_department(self, department_id: int) -> List[Employee]:
        return await self.find(
            Employee.department_id == department_id,
            Employee.is_active.is_(True),
        )

    async def get_many_in_department(
        self,
        employee_ids: Iterable[int],
        department_id: int,
    ) -> List[Employee]:
        return await self.find(
            Employee.id.in_(list(employee_ids)),
            Employee.department_id == department_id,
        )

    async def search(self, query: str) -> List[Employee]:
        pattern = f"%{query}%"
        return await self.find(
            Employee.is_active.is_(True),
            or_(
                Employee.first_name.like(pattern),
                Employee.last_name.like(pattern),
                Employee.email.like(pattern),
            ),
        )

    async def statistics(self) -> dict:
        """Headline numbers over active employees."""
        total_employees = await self.count(Employee.is_active.is_(True))

        dependents_result = await self._db.execute(
            select(func.count()).select_from(Dependent).where(Dependent.is_active.is_(True))
        )
        total_dependents = dependents_result.scalar() or 0

        salary_result = await self._db.execute(
            select(func.avg(Employee.salary)).where(Employee.is_active.is_(True))
        )
        average_salary = salary_result.scalar() or 0

        by_department_result = await self._db.execute(
            select(Department.name, func.count(Employee.id))
            .join(Department, Employee.department_id == Department.id)
            .where(Employee.is_active.is_(True))
            .group_by(Department.name)
            .order_by(Department.name)
        )

        return {
            "total_employees": total_employees,
            "total_dependents": total_dependents,
            "average_salary": round(Decimal(str(average_salary)), 2),
            "employees_by_department": [
                {"department": name, "count": count}
                for name, count in by_department_result.all()
            ],
        }
