"""Attendance records as read from the store, and the daily aggregate we cache."""
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    EXCUSED = "excused"
    UNRECOGNIZED = "unrecognized"

    @classmethod
    def parse(cls, raw: Any) -> "AttendanceStatus":
        """Classify a raw status code (P/PRESENT, A/ABSENT, ...), ignoring case."""
        if not isinstance(raw, str):
            return cls.UNRECOGNIZED
        return _STATUS_CODES.get(raw.upper(), cls.UNRECOGNIZED)


_STATUS_CODES = {
    "P": AttendanceStatus.PRESENT,
    "PRESENT": AttendanceStatus.PRESENT,
    "A": AttendanceStatus.ABSENT,
    "ABSENT": AttendanceStatus.ABSENT,
    "L": AttendanceStatus.LATE,
    "LATE": AttendanceStatus.LATE,
    "E": AttendanceStatus.EXCUSED,
    "EXCUSED": AttendanceStatus.EXCUSED,
}


class AttendanceRecord(BaseModel):
    """One student's mark for one day. Written by the attendance-marking app."""
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    student_id: Optional[str] = None
    class_id: Optional[str] = None
    date: Optional[str] = None  # YYYY-MM-DD
    status: Any = None  # raw code as stored
    reason: Optional[str] = None
    marked_by: Optional[str] = None

    @field_validator("id", "student_id", "class_id", "date", "reason", "marked_by", mode="before")
    @classmethod
    def _coerce_str(cls, v: Any) -> Optional[str]:
        return None if v is None else str(v)

    @classmethod
    def from_store(cls, doc: dict[str, Any]) -> "AttendanceRecord":
        return cls.model_validate(doc)

    @property
    def parsed_status(self) -> AttendanceStatus:
        return AttendanceStatus.parse(self.status)


class AttendanceAggregate(BaseModel):
    """Per-day attendance summary.

    ``total_students`` is the number of records with a recognized status,
    not the class roster size; cached documents depend on that meaning.
    """
    date: str
    total_students: int = 0
    present: int = 0
    absent: int = 0
    late: int = 0
    excused: int = 0
    attendance_rate: float = 0

    def to_document(self) -> dict[str, Any]:
        return self.model_dump()

    @classmethod
    def from_document(cls, doc: dict[str, Any]) -> "AttendanceAggregate":
        return cls.model_validate(
            {k: v for k, v in doc.items() if k in cls.model_fields}
        )
