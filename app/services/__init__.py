"""Services for business logic."""

from app.services.token_service import TokenService
from app.services.auth_service import AuthService
from app.services.department_service import DepartmentService
from app.services.employee_service import EmployeeService
from app.services.dependent_service import DependentService

__all__ = [
    "TokenService",
    "AuthService",
    "DepartmentService",
    "EmployeeService",
    "DependentService",
]
