"""Employee endpoints."""

from typing import List

from fastapi import APIRouter, status

from app.core.dependencies import AdminClaims, CurrentClaims, EmployeeServiceDep
from app.schemas.base import MessageResponse
from app.schemas.employee import (
    EmployeeCreate,
    EmployeeDetailResponse,
    EmployeeResponse,
    EmployeeSearchResult,
    EmployeeStatsResponse,
    EmployeeUpdate,
)

router = APIRouter()


@router.get("", response_model=List[EmployeeResponse])
async def list_employees(service: EmployeeServiceDep, _: CurrentClaims):
    """List active employees."""
    return await service.list_employees()


@router.get("/search", response_model=List[EmployeeSearchResult])
async def search_employees(service: EmployeeServiceDep, _: CurrentClaims, query: str = ""):
    """Search active employees by first name, last name or email."""
    employees = await service.search(query)
    return [
        EmployeeSearchResult(
            id=employee.id,
            full_name=employee.full_name,
            email=employee.email,
            position=employee.position,
            department=employee.department.name if employee.department else None,
        )
        for employee in employees
    ]


@router.get("/stats", response_model=EmployeeStatsResponse)
async def get_employee_stats(service: EmployeeServiceDep, _: CurrentClaims):
    return await service.statistics()


@router.get("/department/{department_id}", response_model=List[EmployeeResponse])
async def list_employees_by_department(
    department_id: int,
    service: EmployeeServiceDep,
    _: CurrentClaims,
):
    return await service.list_by_department(department_id)


@router.get("/{employee_id}", response_model=EmployeeDetailResponse)
async def get_employee(employee_id: int, service: EmployeeServiceDep, _: CurrentClaims):
    """Get an employee with department and active dependents."""
    return await service.get_employee(employee_id)


@router.post("", response_model=EmployeeResponse, status_code=status.HTTP_201_CREATED)
async def create_employee(data: EmployeeCreate, service: EmployeeServiceDep, _: CurrentClaims):
    return await service.create_employee(data)


@router.put("/{employee_id}", response_model=EmployeeResponse)
async def update_employee(
    employee_id: int,
    data: EmployeeUpdate,
    service: EmployeeServiceDep,
    _: CurrentClaims,
):
    """Partial update: empty fields keep their current value."""
    return await service.update_employee(employee_id, data)


@router.delete("/{employee_id}", response_model=MessageResponse)
async def deactivate_employee(employee_id: int, service: EmployeeServiceDep, _: CurrentClaims):
    """Soft delete."""
    await service.deactivate_employee(employee_id)
    return MessageResponse(message="Employee deactivated")


@router.delete("/{employee_id}/permanent", response_model=MessageResponse)
async def purge_employee(employee_id: int, service: EmployeeServiceDep, _: AdminClaims):
    """Permanent delete; the employee's dependents are removed as well."""
    await service.purge_employee(employee_id)
    return MessageResponse(message="Employee permanently deleted")
