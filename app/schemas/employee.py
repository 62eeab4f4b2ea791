"""Employee schemas."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import EmailStr, Field

from app.schemas.base import CamelModel


class EmployeeCreate(CamelModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    phone_number: Optional[str] = Field(None, max_length=20)
    hire_date: datetime
    position: Optional[str] = Field(None, max_length=100)
    salary: Decimal = Field(default=Decimal("0"), ge=0, max_digits=18, decimal_places=2)
    department_id: Optional[int] = None


class EmployeeUpdate(CamelModel):
    """Partial update; omitted or empty fields are left unchanged."""
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    email: Optional[EmailStr] = None
    phone_number: Optional[str] = Field(None, max_length=20)
    hire_date: Optional[datetime] = None
    position: Optional[str] = Field(None, max_length=100)
    salary: Optional[Decimal] = Field(None, ge=0, max_digits=18, decimal_places=2)
    department_id: Optional[int] = None


class DepartmentSummary(CamelModel):
    id: int
    name: str
    code: str
    location: Optional[str] = None


class EmployeeDependent(CamelModel):
    id: int
    first_name: str
    last_name: str
    full_name: str
    relationship: str
    age: int


class EmployeeResponse(CamelModel):
    id: int
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone_number: Optional[str] = None
    hire_date: datetime
    position: Optional[str] = None
    salary: Decimal
    department_id: Optional[int] = None
    department: Optional[DepartmentSummary] = None
    dependents_count: int = 0
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


class EmployeeDetailResponse(EmployeeResponse):
    # Only active dependents are listed.
    dependents: List[EmployeeDependent] = Field(default=[], validation_alias="active_dependents")


class EmployeeSearchResult(CamelModel):
    id: int
    full_name: str
    email: str
    position: Optional[str] = None
    department: Optional[str] = None


class DepartmentHeadcount(CamelModel):
    department: str
    count: int


class EmployeeStatsResponse(CamelModel):
    total_employees: int
    total_dependents: int
    average_salary: Decimal
    employees_by_department: List[DepartmentHeadcount] = []
