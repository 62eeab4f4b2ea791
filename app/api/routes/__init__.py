"""API routes package."""

from fastapi import APIRouter

from app.api.routes import (
    auth,
    departments,
    employees,
    dependents,
)

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(departments.router, prefix="/departments", tags=["Departments"])
api_router.include_router(employees.router, prefix="/employees", tags=["Employees"])
api_router.include_router(dependents.router, prefix="/dependents", tags=["Dependents"])
