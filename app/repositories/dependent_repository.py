"""Dependent data access; every read includes the responsible employee."""

from typing import List

from sqlalchemy import Select, select
from sqlalchemy.orm import selectinload

from app.models.dependent import Dependent
from app.repositories.base import Repository


class DependentRepository(Repository[Dependent]):
    model = Dependent

    def _select(self) -> Select:
        return select(Dependent).options(selectinload(Dependent.employee))

    async def get_by_employee_id(self, employee_id: int) -> List[Dependent]:
        return await self.find(Dependent.employee_id == employee_id)

    async def get_active_by_employee_id(self, employee_id: int) -> List[Dependent]:
        return await self.find(
            Dependent.employee_id == employee_id,
            Dependent.is_active.is_(True),
        )

    async def count_by_employee_id(self, employee_id: int) -> int:
        return await self.count(
            Dependent.employee_id == employee_id,
            Dependent.is_active.is_(True),
        )
