"""Outstanding-fee aging buckets."""
from __future__ import annotations

from datetime import date
from typing import Iterable, Optional

from app.models.fees import AgingBucket, FeesAgingReport, Invoice
from app.services.attendance_aggregator import round_half_up
from app.store.base import QueryFilter, RecordStore

INVOICES_COLLECTION = "invoices"

# (label, max days overdue inclusive); None means no upper bound
AGING_BUCKETS: list[tuple[str, Optional[int]]] = [
    ("Current", 0),
    ("1-30 days", 30),
    ("31-60 days", 60),
    ("61-90 days", 90),
    ("90+ days", None),
]


def days_overdue(invoice: Invoice, as_of: date) -> int:
    """Days past the due date; 0 when not yet due or the due date is missing/invalid."""
    if not invoice.due_date:
        return 0
    try:
        due = date.fromisoformat(invoice.due_date[:10])
    except ValueError:
        return 0
    return max((as_of - due).days, 0)


def bucket_invoices(invoices: Iterable[Invoice], as_of: date) -> list[AgingBucket]:
    buckets = [AgingBucket(label=label) for label, _ in AGING_BUCKETS]
    for invoice in invoices:
        overdue = days_overdue(invoice, as_of)
        for bucket, (_, upper) in zip(buckets, AGING_BUCKETS):
            if upper is None or overdue <= upper:
                bucket.amount += invoice.balance
                bucket.count += 1
                break
    for bucket in buckets:
        bucket.amount = round_half_up(bucket.amount)
    return buckets


class FeesAgingCalculator:
    def __init__(self, store: RecordStore):
        self.store = store

    async def aging_report(self, as_of: date) -> FeesAgingReport:
        docs = await self.store.query(
            INVOICES_COLLECTION, [QueryFilter(field="balance", operator=">", value=0)]
        )
        invoices = [Invoice.from_store(d) for d in docs]
        return FeesAgingReport(
            as_of_date=as_of.isoformat(),
            aging_buckets=bucket_invoices(invoices, as_of),
        )
