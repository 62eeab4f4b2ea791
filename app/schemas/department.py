"""Department schemas."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from app.schemas.base import CamelModel


class DepartmentCreate(CamelModel):
    name: str = Field(min_length=1, max_length=100)
    code: str = Field(min_length=1, max_length=20)
    description: Optional[str] = Field(None, max_length=500)
    location: Optional[str] = Field(None, max_length=200)


class DepartmentUpdate(CamelModel):
    """Partial update; omitted or empty fields are left unchanged."""
    name: Optional[str] = Field(None, max_length=100)
    code: Optional[str] = Field(None, max_length=20)
    description: Optional[str] = Field(None, max_length=500)
    location: Optional[str] = Field(None, max_length=200)


class DepartmentEmployee(CamelModel):
    id: int
    full_name: str
    email: str
    position: Optional[str] = None
    salary: Decimal


class DepartmentResponse(CamelModel):
    id: int
    name: str
    code: str
    description: Optional[str] = None
    location: Optional[str] = None
    employee_count: int = 0
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


class DepartmentDetailResponse(DepartmentResponse):
    employees: List[DepartmentEmployee] = []


class DepartmentStat(CamelModel):
    name: str
    code: str
    employee_count: int
    average_salary: Decimal


class DepartmentStatsResponse(CamelModel):
    total_departments: int
    total_employees: int
    average_employees_per_department: float
    department_with_most_employees: Optional[DepartmentStat] = None
    department_with_least_employees: Optional[DepartmentStat] = None
    all_departments: List[DepartmentStat] = []


class TransferredEmployee(CamelModel):
    id: int
    full_name: str


class TransferResponse(CamelModel):
    message: str
    from_department: str = Field(alias="from")
    to_department: str = Field(alias="to")
    transferred_employees: List[TransferredEmployee]
