"""Headline counts for the admin dashboard."""
from app.models.fees import Invoice
from app.services.attendance_aggregator import round_half_up
from app.services.fees_aging import INVOICES_COLLECTION
from app.store.base import QueryFilter, RecordStore

STUDENTS_COLLECTION = "students"
TEACHERS_COLLECTION = "teachers"
ACTIVE = "active"


async def compute_kpis(store: RecordStore) -> dict:
    """Student/teacher counts and fee totals across all invoices."""
    students = await store.query(STUDENTS_COLLECTION, [])
    teachers = await store.query(
        TEACHERS_COLLECTION, [QueryFilter(field="status", operator="==", value=ACTIVE)]
    )
    invoices = [Invoice.from_store(d) for d in await store.query(INVOICES_COLLECTION, [])]
    return {
        "total_students": len(students),
        "active_students": sum(1 for s in students if s.get("status") == ACTIVE),
        "total_teachers": len(teachers),
        "fees_collected": round_half_up(sum(i.paid_amount for i in invoices)),
        "fees_pending": round_half_up(sum(i.balance for i in invoices)),
    }
