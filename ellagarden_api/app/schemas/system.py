"""Schemas for the health, API info and admin dashboard endpoints."""

from datetime import datetime
from typing import Dict, List

from .base import CamelModel


class HealthRead(CamelModel):
    status: str = "ok"
    environment: str
    timestamp: datetime
    sections: int


class ApiInfo(CamelModel):
    api: str
    version: str
    endpoints: List[str]


class DashboardSection(CamelModel):
    id: int
    title: str
    slug: str
    updated_at: datetime


class DashboardRead(CamelModel):
    total_sections: int
    total_documents: int
    total_bookings: int
    bookings_by_status: Dict[str, int]
    last_updated: datetime
    sections: List[DashboardSection]
