"""
Pydantic models for citizen reports.
These models handle validation for report submission, edits and responses.
"""

from pydantic import ConfigDict, Field
from typing import Optional, List
from enum import Enum

from app.models.base import CamelModel
from app.services.status_workflow import ReportStatus


class ReportPriority(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class MediaItem(CamelModel):
    uri: str = Field(..., min_length=1)
    type: str = Field(default="image", description="image | video")


class TimelineEntry(CamelModel):
    """One audit trail entry. Entries are append-only."""
    date: Optional[str] = None
    note: str
    status: ReportStatus


class ReportCreate(CamelModel):
    """
    Fields a citizen provides when submitting a report.
    The owner is always the caller (X-User-ID header).
    """
    category: str = Field(..., min_length=1, max_length=100, description="Department name")
    title: str = Field(..., min_length=1, max_length=200)
    description: str = Field(default="", max_length=2000)
    location: Optional[str] = Field(None, max_length=500)
    priority: ReportPriority = ReportPriority.MEDIUM
    contact_info: Optional[str] = Field(None, max_length=200)
    media: List[MediaItem] = Field(default_factory=list)
    photo: Optional[str] = None

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "category": "Garbage",
                "title": "Overflowing bin",
                "description": "Bin near the market has not been emptied for a week.",
                "location": "Main Market, Block C",
                "priority": "High",
                "media": [{"uri": "https://example.com/bin.jpg", "type": "image"}],
            }
        }
    )


class ReportUpdate(CamelModel):
    """
    Citizen-editable fields. Only fields present in the request are applied;
    emptiness of title/description/location is checked by the service.
    """
    title: Optional[str] = None
    description: Optional[str] = None
    location: Optional[str] = None
    contact_info: Optional[str] = None
    media: Optional[List[MediaItem]] = None


class ReportResponse(CamelModel):
    id: str
    user_id: str
    category: str
    title: str
    description: str = ""
    location: str = "Unknown"
    priority: ReportPriority = ReportPriority.MEDIUM
    status: ReportStatus = ReportStatus.PENDING
    assigned_to: Optional[str] = None
    assigned_user_name: Optional[str] = None
    contact_info: Optional[str] = None
    media: List[MediaItem] = Field(default_factory=list)
    photo: Optional[str] = None
    timeline: List[TimelineEntry] = Field(default_factory=list)
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


class StatusUpdateRequest(CamelModel):
    status: ReportStatus


class AssignRequest(CamelModel):
    user_id: str = Field(..., min_length=1, description="Department user UID")
    user_name: str = Field(..., min_length=1)


class DepartmentChangeRequest(CamelModel):
    department_name: str = Field(..., min_length=1)
