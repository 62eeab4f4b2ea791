"""Department data access with employees eagerly loaded."""

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import Select, func, or_, select
from sqlalchemy.orm import selectinload

from app.models.department import Department
from app.models.employee import Employee
from app.repositories.base import Repository


class DepartmentRepository(Repository[Department]):
    model = Department

    def _select(self) -> Select:
        return select(Department).options(selectinload(Department.employees))

    async def get_by_code(self, code: str) -> Optional[Department]:
        return await self.first_or_default(Department.code == code)

    async def search(self, query: str) -> List[Department]:
        pattern = f"%{query}%"
        return await self.find(
            or_(
                Department.name.like(pattern),
                Department.code.like(pattern),
                Department.description.like(pattern),
            )
        )

    async def statistics(self) -> List[dict]:
        """Employee count and average salary per department, busiest first."""
        result = await self._db.execute(
            select(
                Department.name,
                Department.code,
                func.count(Employee.id).label("employee_count"),
                func.avg(Employee.salary).label("average_salary"),
            )
            .outerjoin(Employee, Employee.department_id == Department.id)
            .group_by(Department.id, Department.name, Department.code)
            .order_by(func.count(Employee.id).desc(), Department.id)
        )
        return [
            {
                "name": row.name,
                "code": row.code,
                "employee_count": row.employee_count,
                "average_salary": round(Decimal(str(row.average_salary or 0)), 2),
            }
            for row in result.all()
        ]
