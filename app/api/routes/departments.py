"""Department endpoints."""

from typing import List

from fastapi import APIRouter, Body, status

from app.core.dependencies import AdminClaims, CurrentClaims, DepartmentServiceDep
from app.schemas.base import MessageResponse
from app.schemas.department import (
    DepartmentCreate,
    DepartmentDetailResponse,
    DepartmentResponse,
    DepartmentStatsResponse,
    DepartmentUpdate,
    TransferResponse,
)

router = APIRouter()


@router.get("", response_model=List[DepartmentResponse])
async def list_departments(service: DepartmentServiceDep, _: CurrentClaims):
    """List all departments with their employee counts."""
    return await service.list_departments()


@router.get("/search", response_model=List[DepartmentResponse])
async def search_departments(service: DepartmentServiceDep, _: CurrentClaims, query: str = ""):
    """Substring search over name, code and description."""
    return await service.search(query)


@router.get("/stats", response_model=DepartmentStatsResponse)
async def get_department_stats(service: DepartmentServiceDep, _: CurrentClaims):
    return await service.statistics()


@router.get("/code/{code}", response_model=DepartmentResponse)
async def get_department_by_code(code: str, service: DepartmentServiceDep, _: CurrentClaims):
    return await service.get_by_code(code)


@router.get("/{department_id}", response_model=DepartmentDetailResponse)
async def get_department(department_id: int, service: DepartmentServiceDep, _: CurrentClaims):
    """Get a department with its employees."""
    return await service.get_department(department_id)


@router.post("", response_model=DepartmentResponse, status_code=status.HTTP_201_CREATED)
async def create_department(data: DepartmentCreate, service: DepartmentServiceDep, _: AdminClaims):
    return await service.create_department(data)


@router.put("/{department_id}", response_model=DepartmentResponse)
async def update_department(
    department_id: int,
    data: DepartmentUpdate,
    service: DepartmentServiceDep,
    _: AdminClaims,
):
    """Partial update: empty fields keep their current value."""
    return await service.update_department(department_id, data)


@router.delete("/{department_id}", response_model=MessageResponse)
async def deactivate_department(department_id: int, service: DepartmentServiceDep, _: AdminClaims):
    """Soft delete: the department is kept for audit but marked inactive."""
    await service.deactivate_department(department_id)
    return MessageResponse(message="Department deactivated")


@router.delete("/{department_id}/permanent", response_model=MessageResponse)
async def purge_department(department_id: int, service: DepartmentServiceDep, _: AdminClaims):
    """Permanent delete. Employees are kept and lose their department."""
    await service.purge_department(department_id)
    return MessageResponse(message="Department permanently deleted")


@router.post("/{from_department_id}/transfer/{to_department_id}", response_model=TransferResponse)
async def transfer_employees(
    from_department_id: int,
    to_department_id: int,
    service: DepartmentServiceDep,
    _: AdminClaims,
    employee_ids: List[int] = Body(...),
):
    """Move the listed employees from one department to another."""
    return await service.transfer_employees(from_department_id, to_department_id, employee_ids)
