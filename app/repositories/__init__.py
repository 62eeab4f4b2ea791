"""Repositories: the only layer that mutates persisted state."""

from app.repositories.base import Repository
from app.repositories.user_repository import UserRepository
from app.repositories.department_repository import DepartmentRepository
from app.repositories.employee_repository import EmployeeRepository
from app.repositories.dependent_repository import DependentRepository

__all__ = [
    "Repository",
    "UserRepository",
    "DepartmentRepository",
    "EmployeeRepository",
    "DependentRepository",
]
