"""Dependent endpoints."""

from typing import List

from fastapi import APIRouter, status

from app.core.dependencies import AdminClaims, CurrentClaims, DependentServiceDep
from app.schemas.base import MessageResponse
from app.schemas.dependent import (
    DependentCountResponse,
    DependentCreate,
    DependentResponse,
    DependentUpdate,
)

router = APIRouter()


@router.get("", response_model=List[DependentResponse])
async def list_dependents(service: DependentServiceDep, _: CurrentClaims):
    return await service.list_dependents()


@router.get("/employee/{employee_id}", response_model=List[DependentResponse])
async def list_dependents_by_employee(
    employee_id: int,
    service: DependentServiceDep,
    _: CurrentClaims,
):
    """Active dependents of one employee."""
    return await service.list_by_employee(employee_id)


@router.get("/employee/{employee_id}/count", response_model=DependentCountResponse)
async def count_dependents_by_employee(
    employee_id: int,
    service: DependentServiceDep,
    _: CurrentClaims,
):
    total = await service.count_by_employee(employee_id)
    return DependentCountResponse(employee_id=employee_id, total_dependents=total)


@router.get("/{dependent_id}", response_model=DependentResponse)
async def get_dependent(dependent_id: int, service: DependentServiceDep, _: CurrentClaims):
    return await service.get_dependent(dependent_id)


@router.post("", response_model=DependentResponse, status_code=status.HTTP_201_CREATED)
async def create_dependent(data: DependentCreate, service: DependentServiceDep, _: CurrentClaims):
    return await service.create_dependent(data)


@router.put("/{dependent_id}", response_model=DependentResponse)
async def update_dependent(
    dependent_id: int,
    data: DependentUpdate,
    service: DependentServiceDep,
    _: CurrentClaims,
):
    return await service.update_dependent(dependent_id, data)


@router.delete("/{dependent_id}", response_model=MessageResponse)
async def deactivate_dependent(dependent_id: int, service: DependentServiceDep, _: CurrentClaims):
    """Soft delete."""
    await service.deactivate_dependent(dependent_id)
    return MessageResponse(message="Dependent deactivated")


@router.delete("/{dependent_id}/permanent", response_model=MessageResponse)
async def purge_dependent(dependent_id: int, service: DependentServiceDep, _: AdminClaims):
    await service.purge_dependent(dependent_id)
    return MessageResponse(message="Dependent permanently deleted")
