"""Database models."""

from app.models.base import AuditMixin
from app.models.user import User, UserRole
from app.models.department import Department
from app.models.employee import Employee
from app.models.dependent import Dependent

__all__ = [
    "AuditMixin",
    "User",
    "UserRole",
    "Department",
    "Employee",
    "Dependent",
]
