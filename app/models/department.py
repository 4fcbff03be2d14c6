"""
Department reference data models.
"""

from pydantic import Field
from typing import Optional

from app.models.base import CamelModel


class DepartmentCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    icon: Optional[str] = None
    color: Optional[str] = Field(None, description="Hex tint, e.g. #22c55e")


class DepartmentUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    icon: Optional[str] = None
    color: Optional[str] = None
    is_active: Optional[bool] = None


class DepartmentResponse(CamelModel):
    id: str
    name: str
    icon: Optional[str] = None
    color: Optional[str] = None
    is_active: bool = True
    created_at: Optional[str] = None
    updated_at: Optional[str] = None


# Departments a fresh deployment starts with (see scripts/seed_db.py)
DEFAULT_DEPARTMENTS = [
    {"id": "Garbage", "name": "Garbage", "icon": "🗑️", "color": "#22c55e"},
    {"id": "Electricity", "name": "Electricity", "icon": "⚡", "color": "#eab308"},
    {"id": "Water", "name": "Water Supply", "icon": "💧", "color": "#3b82f6"},
    {"id": "Gas", "name": "Sui Gas", "icon": "🔥", "color": "#f97316"},
    {"id": "Roads", "name": "Roads & Infrastructure", "icon": "🛣️", "color": "#6b7280"},
    {"id": "Sewerage", "name": "Sewerage", "icon": "🚰", "color": "#14b8a6"},
    {"id": "Streetlights", "name": "Street Lights", "icon": "💡", "color": "#f59e0b"},
    {"id": "Other", "name": "Other", "icon": "📋", "color": "#8b5cf6"},
]
