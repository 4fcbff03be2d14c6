"""
Admin endpoints - triage, assignment, departments and staff.

Every route requires the caller (X-User-ID) to hold the admin role.

SCOPE OF ADMIN:
✅ Change report status, any status to any status
✅ Assign reports, move reports between departments
✅ Manage departments and department users

❌ NOT edit report content
❌ NOT delete reports
"""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
import logging

from app.core.exceptions import NotFoundError
from app.models.base import BaseResponse
from app.models.department import DepartmentCreate, DepartmentResponse, DepartmentUpdate
from app.models.report import AssignRequest, DepartmentChangeRequest, ReportResponse, StatusUpdateRequest
from app.models.user import (
    DepartmentUserCreate,
    DepartmentUserCreated,
    DepartmentUserUpdate,
    PasswordResetRequest,
    ToggleActiveRequest,
    UserResponse,
    UserStatusRequest,
)
from app.routes.dependencies import get_admin_service, get_department_service, require_admin
from app.services.admin_service import AdminService
from app.services.department_service import DepartmentService
from app.services.status_workflow import ReportStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(require_admin)])


# ----------------------------------------------------------------------
# Reports
# ----------------------------------------------------------------------

@router.get("/reports", response_model=List[ReportResponse])
async def list_reports(
    status_filter: Optional[ReportStatus] = Query(None, alias="status"),
    service: AdminService = Depends(get_admin_service),
):
    """All reports, newest first, optionally filtered by status."""
    return service.get_all_reports(status=status_filter)


@router.get("/reports/{report_id}", response_model=ReportResponse)
async def get_report(report_id: str, service: AdminService = Depends(get_admin_service)):
    report = service.get_report_by_id(report_id)
    if report is None:
        raise NotFoundError("reports", report_id)
    return report


@router.patch("/reports/{report_id}/status", response_model=ReportResponse)
async def update_report_status(
    report_id: str,
    request: StatusUpdateRequest,
    admin_uid: str = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
):
    """
    Change report status and notify the reporting citizen.

    **Rules:**
    - Any status may move to any status
    - One timeline entry is appended per call
    """
    service.update_report_status(report_id, request.status, changed_by=admin_uid)
    return service.get_report_by_id(report_id)


@router.post("/reports/{report_id}/assign", response_model=ReportResponse)
async def assign_report(
    report_id: str,
    request: AssignRequest,
    service: AdminService = Depends(get_admin_service),
):
    service.assign_report(report_id, request.user_id, request.user_name)
    return service.get_report_by_id(report_id)


@router.post("/reports/{report_id}/department", response_model=ReportResponse)
async def change_report_department(
    report_id: str,
    request: DepartmentChangeRequest,
    service: AdminService = Depends(get_admin_service),
):
    service.change_report_department(report_id, request.department_name)
    return service.get_report_by_id(report_id)


# ----------------------------------------------------------------------
# Departments
# ----------------------------------------------------------------------

@router.get("/departments", response_model=List[DepartmentResponse])
async def list_departments(service: DepartmentService = Depends(get_department_service)):
    return service.get_departments()


@router.post("/departments", response_model=DepartmentResponse, status_code=status.HTTP_201_CREATED)
async def add_department(
    request: DepartmentCreate,
    service: DepartmentService = Depends(get_department_service),
):
    department_id = service.add_department(request.to_document())
    return service.get_department(department_id)


@router.patch("/departments/{department_id}", response_model=BaseResponse)
async def update_department(
    department_id: str,
    request: DepartmentUpdate,
    service: DepartmentService = Depends(get_department_service),
):
    service.update_department(department_id, request.to_document(exclude_unset=True))
    return BaseResponse(message="Department updated")


@router.delete("/departments/{department_id}", response_model=BaseResponse)
async def delete_department(
    department_id: str,
    service: DepartmentService = Depends(get_department_service),
):
    service.delete_department(department_id)
    return BaseResponse(message="Department deleted")


# ----------------------------------------------------------------------
# Department users
# ----------------------------------------------------------------------

@router.get("/users", response_model=List[UserResponse])
async def list_department_users(
    department_id: Optional[str] = Query(None, alias="departmentId"),
    service: AdminService = Depends(get_admin_service),
):
    return service.get_department_users(department_id)


@router.post("/users", response_model=DepartmentUserCreated, status_code=status.HTTP_201_CREATED)
async def create_department_user(
    request: DepartmentUserCreate,
    admin_uid: str = Depends(require_admin),
    service: AdminService = Depends(get_admin_service),
):
    """
    Create a sign-in account and users document for a department user.

    The temporary password is returned once; the admin hands it over.
    """
    uid, temp_password = service.create_department_user(request.to_document(), admin_uid)
    return DepartmentUserCreated(uid=uid, temp_password=temp_password)


@router.post("/users/password-reset", response_model=BaseResponse)
async def reset_user_password(
    request: PasswordResetRequest,
    service: AdminService = Depends(get_admin_service),
):
    link = service.reset_user_password(request.email)
    return BaseResponse(message=link)


@router.patch("/users/{uid}", response_model=BaseResponse)
async def update_department_user(
    uid: str,
    request: DepartmentUserUpdate,
    service: AdminService = Depends(get_admin_service),
):
    service.update_department_user(uid, request.to_document(exclude_unset=True))
    return BaseResponse(message="User updated")


@router.post("/users/{uid}/active", response_model=BaseResponse)
async def toggle_user_active(
    uid: str,
    request: ToggleActiveRequest,
    service: AdminService = Depends(get_admin_service),
):
    service.toggle_user_active(uid, request.is_active)
    return BaseResponse(message="User enabled" if request.is_active else "User disabled")


@router.post("/users/{uid}/status", response_model=BaseResponse)
async def update_user_status(
    uid: str,
    request: UserStatusRequest,
    service: AdminService = Depends(get_admin_service),
):
    service.update_user_status(uid, request.status)
    return BaseResponse(message="Status updated")
