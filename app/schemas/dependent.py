"""Dependent schemas."""

from datetime import date, datetime
from typing import Optional

from pydantic import Field

from app.schemas.base import CamelModel


class DependentCreate(CamelModel):
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    date_of_birth: date
    relationship: str = Field(min_length=1, max_length=50)
    gender: Optional[str] = Field(None, max_length=20)
    identification_number: Optional[str] = Field(None, max_length=50)
    employee_id: int


class DependentUpdate(CamelModel):
    """Partial update; omitted or empty fields are left unchanged."""
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    date_of_birth: Optional[date] = None
    relationship: Optional[str] = Field(None, max_length=50)
    gender: Optional[str] = Field(None, max_length=20)
    identification_number: Optional[str] = Field(None, max_length=50)


class DependentResponse(CamelModel):
    id: int
    first_name: str
    last_name: str
    full_name: str
    date_of_birth: date
    age: int
    relationship: str
    gender: Optional[str] = None
    identification_number: Optional[str] = None
    employee_id: int
    employee_name: str
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


class DependentCountResponse(CamelModel):
    employee_id: int
    total_dependents: int
