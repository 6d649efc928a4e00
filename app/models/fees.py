"""Invoices as read from the store and the fee aging rollup."""
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator


class Invoice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    invoice_number: Optional[str] = None
    student_id: Optional[str] = None
    class_id: Optional[str] = None
    academic_year: Optional[str] = None
    total_amount: float = 0.0
    paid_amount: float = 0.0
    balance: float = 0.0
    status: Optional[str] = None  # pending, partial, paid, overdue
    due_date: Optional[str] = None  # YYYY-MM-DD

    @field_validator("total_amount", "paid_amount", "balance", mode="before")
    @classmethod
    def _none_is_zero(cls, v: Any) -> Any:
        return 0.0 if v is None else v

    @classmethod
    def from_store(cls, doc: dict[str, Any]) -> "Invoice":
        return cls.model_validate(doc)


class AgingBucket(BaseModel):
    label: str
    amount: float = 0.0
    count: int = 0


class FeesAgingReport(BaseModel):
    as_of_date: str
    aging_buckets: list[AgingBucket]
