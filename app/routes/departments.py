"""
Public department list (report categories).
"""

from typing import List
from fastapi import APIRouter, Depends, Query

from app.models.department import DepartmentResponse
from app.routes.dependencies import get_department_service
from app.services.department_service import DepartmentService

router = APIRouter(prefix="/departments", tags=["Departments"])


@router.get("", response_model=List[DepartmentResponse])
async def list_departments(
    active_only: bool = Query(True, alias="activeOnly"),
    service: DepartmentService = Depends(get_department_service),
):
    return service.get_departments(active_only=active_only)
