"""
Report endpoints - citizen report submission, edits and deletion.
"""

from typing import List
from fastapi import APIRouter, Depends, status
import logging

from app.core.exceptions import NotFoundError, StatusPermissionError
from app.models.base import BaseResponse
from app.models.report import ReportCreate, ReportResponse, ReportUpdate
from app.routes.dependencies import get_current_user_id, get_report_service
from app.services.report_service import ReportService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/reports", tags=["Reports"])


def _get_owned_report(report_id: str, user_id: str, service: ReportService) -> dict:
    report = service.get_report_by_id(report_id)
    if report is None:
        raise NotFoundError("reports", report_id)
    if report.get("userId") != user_id:
        raise StatusPermissionError("You can only access your own reports")
    return report


@router.post("", response_model=ReportResponse, status_code=status.HTTP_201_CREATED)
async def submit_report(
    report: ReportCreate,
    user_id: str = Depends(get_current_user_id),
    service: ReportService = Depends(get_report_service),
):
    """
    Submit a new citizen report.

    The report starts in pending status with a one-entry timeline.
    """
    logger.info(f"📝 POST /reports - category={report.category}, user={user_id}")
    data = report.to_document()
    data["userId"] = user_id
    report_id = service.create_report(data)
    return service.get_report_by_id(report_id)


@router.get("", response_model=List[ReportResponse])
async def get_my_reports(
    user_id: str = Depends(get_current_user_id),
    service: ReportService = Depends(get_report_service),
):
    return service.get_user_reports(user_id)


@router.get("/{report_id}", response_model=ReportResponse)
async def get_report(
    report_id: str,
    user_id: str = Depends(get_current_user_id),
    service: ReportService = Depends(get_report_service),
):
    return _get_owned_report(report_id, user_id, service)


@router.patch("/{report_id}", response_model=ReportResponse)
async def edit_report(
    report_id: str,
    update: ReportUpdate,
    user_id: str = Depends(get_current_user_id),
    service: ReportService = Depends(get_report_service),
):
    """
    Edit title, description, location, contact info or media.

    Allowed only while the report is pending or assigned. The status check
    uses the stored status, not one supplied by the client.
    """
    report = _get_owned_report(report_id, user_id, service)
    service.update_report(report_id, report.get("status"), update.to_document(exclude_unset=True))
    return service.get_report_by_id(report_id)


@router.delete("/{report_id}", response_model=BaseResponse)
async def delete_report(
    report_id: str,
    user_id: str = Depends(get_current_user_id),
    service: ReportService = Depends(get_report_service),
):
    """Permanently delete a pending report."""
    report = _get_owned_report(report_id, user_id, service)
    service.delete_report(report_id, report.get("status"))
    return BaseResponse(message="Report deleted")
