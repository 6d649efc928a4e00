"""Pydantic models for store records and analytics outputs."""
from app.models.attendance import AttendanceAggregate, AttendanceRecord, AttendanceStatus
from app.models.fees import AgingBucket, FeesAgingReport, Invoice

__all__ = [
    "AttendanceAggregate",
    "AttendanceRecord",
    "AttendanceStatus",
    "AgingBucket",
    "FeesAgingReport",
    "Invoice",
]
