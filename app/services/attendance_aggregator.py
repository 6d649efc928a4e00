"""Attendance rollups and the daily aggregate cache.

Raw attendance marks live in the ``attendance`` collection. Daily
aggregates are cached in ``analytics`` under ``daily_attendance_<date>``;
existing cached data depends on that key format and on the aggregate's
field names, so neither may change.
"""
from __future__ import annotations

import logging
import math
import re
from datetime import date, timedelta
from typing import Iterable, Optional

from app.models.attendance import AttendanceAggregate, AttendanceRecord, AttendanceStatus
from app.store.base import QueryFilter, RecordStore

logger = logging.getLogger(__name__)

ATTENDANCE_COLLECTION = "attendance"
ANALYTICS_COLLECTION = "analytics"
DEFAULT_WINDOW_DAYS = 30

_ISO_DAY = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def parse_day(value: str) -> date:
    """Parse a strict YYYY-MM-DD day. Raises ValueError for anything else."""
    if not isinstance(value, str) or not _ISO_DAY.fullmatch(value):
        raise ValueError(f"Invalid date format (YYYY-MM-DD): {value!r}")
    return date.fromisoformat(value)


def daily_cache_key(day: str) -> str:
    return f"daily_attendance_{day}"


def round_half_up(value: float) -> float:
    """Round to 2 decimals, halves away from zero (not banker's rounding)."""
    return math.floor(value * 100 + 0.5) / 100


def summarize_attendance(day: str, statuses: Iterable[AttendanceStatus]) -> AttendanceAggregate:
    counts = {
        AttendanceStatus.PRESENT: 0,
        AttendanceStatus.ABSENT: 0,
        AttendanceStatus.LATE: 0,
        AttendanceStatus.EXCUSED: 0,
    }
    for status in statuses:
        if status in counts:
            counts[status] += 1

    total = sum(counts.values())
    present = counts[AttendanceStatus.PRESENT]
    rate = round_half_up(present / total * 100) if total > 0 else 0
    return AttendanceAggregate(
        date=day,
        total_students=total,
        present=present,
        absent=counts[AttendanceStatus.ABSENT],
        late=counts[AttendanceStatus.LATE],
        excused=counts[AttendanceStatus.EXCUSED],
        attendance_rate=rate,
    )


def days_in_range(start: str, end: str) -> list[str]:
    """Every calendar day from start to end inclusive, as YYYY-MM-DD.

    Returns an empty list when start is after end or either bound is not a
    valid YYYY-MM-DD date.
    """
    try:
        d_start = parse_day(start)
        d_end = parse_day(end)
    except ValueError:
        return []
    span = (d_end - d_start).days
    return [(d_start + timedelta(days=i)).isoformat() for i in range(span + 1)]


class AttendanceAggregator:
    """Computes attendance aggregates and keeps the daily cache filled.

    Every call goes to the store; range operations issue one request per
    day, sequentially.
    """

    def __init__(self, store: RecordStore, window_days: int = DEFAULT_WINDOW_DAYS):
        self.store = store
        self.window_days = window_days

    async def _summarize_query(self, day: str, filters: list[QueryFilter]) -> AttendanceAggregate:
        docs = await self.store.query(ATTENDANCE_COLLECTION, filters)
        records = [AttendanceRecord.from_store(d) for d in docs]
        return summarize_attendance(day, (r.parsed_status for r in records))

    async def aggregate_daily_attendance(self, day: str) -> AttendanceAggregate:
        """Summarize every attendance record marked on `day`, across all classes."""
        return await self._summarize_query(
            day, [QueryFilter(field="date", operator="==", value=day)]
        )

    async def aggregate_class_attendance(
        self, class_id: str, start_date: str, end_date: str
    ) -> list[AttendanceAggregate]:
        """One aggregate per day of the inclusive range, zero-filled days included."""
        days = days_in_range(start_date, end_date)
        logger.info(f"Aggregating attendance for class {class_id} over {len(days)} day(s)")
        results: list[AttendanceAggregate] = []
        for day in days:
            results.append(
                await self._summarize_query(
                    day,
                    [
                        QueryFilter(field="class_id", operator="==", value=class_id),
                        QueryFilter(field="date", operator="==", value=day),
                    ],
                )
            )
        return results

    async def save_precomputed_attendance(self, day: str, aggregate: AttendanceAggregate) -> None:
        await self.store.write_doc(ANALYTICS_COLLECTION, daily_cache_key(day), aggregate.to_document())

    async def get_precomputed_attendance(self, day: str) -> Optional[AttendanceAggregate]:
        doc = await self.store.read_doc(ANALYTICS_COLLECTION, daily_cache_key(day))
        if doc is None:
            return None
        return AttendanceAggregate.from_document(doc)

    async def get_or_compute_daily(self, day: str) -> AttendanceAggregate:
        """Serve `day` from the cache, computing and writing it back on a miss."""
        aggregate = await self.get_precomputed_attendance(day)
        if aggregate is not None:
            return aggregate
        logger.debug(f"Attendance cache miss for {day}")
        aggregate = await self.aggregate_daily_attendance(day)
        await self.save_precomputed_attendance(day, aggregate)
        return aggregate

    async def aggregate_last_30_days(self, as_of: Optional[date] = None) -> list[AttendanceAggregate]:
        """Rolling window ``[as_of - window_days, as_of]``, filling cache misses.

        Cached days are returned untouched. If the store fails mid-way, the
        days already filled stay cached.
        """
        as_of = as_of or date.today()
        start = as_of - timedelta(days=self.window_days)
        days = days_in_range(start.isoformat(), as_of.isoformat())
        logger.info(f"Filling rolling attendance window of {len(days)} day(s) ending {as_of}")
        return [await self.get_or_compute_daily(day) for day in days]

    async def recompute_daily_attendance(self, start_date: str, end_date: str) -> list[AttendanceAggregate]:
        """Recompute and overwrite the cached aggregate for every day in the range."""
        days = days_in_range(start_date, end_date)
        logger.info(f"Recomputing daily attendance cache for {len(days)} day(s)")
        results: list[AttendanceAggregate] = []
        for day in days:
            aggregate = await self.aggregate_daily_attendance(day)
            await self.save_precomputed_attendance(day, aggregate)
            results.append(aggregate)
        return results
