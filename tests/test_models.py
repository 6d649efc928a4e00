import pytest

from app.models.attendance import AttendanceAggregate, AttendanceRecord, AttendanceStatus


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("P", AttendanceStatus.PRESENT),
        ("present", AttendanceStatus.PRESENT),
        ("a", AttendanceStatus.ABSENT),
        ("Absent", AttendanceStatus.ABSENT),
        ("L", AttendanceStatus.LATE),
        ("late", AttendanceStatus.LATE),
        ("e", AttendanceStatus.EXCUSED),
        ("EXCUSED", AttendanceStatus.EXCUSED),
        ("X", AttendanceStatus.UNRECOGNIZED),
        (" P", AttendanceStatus.UNRECOGNIZED),
        ("leave", AttendanceStatus.UNRECOGNIZED),
        ("", AttendanceStatus.UNRECOGNIZED),
        (None, AttendanceStatus.UNRECOGNIZED),
        (1, AttendanceStatus.UNRECOGNIZED),
    ],
)
def test_status_parse(raw, expected):
    assert AttendanceStatus.parse(raw) is expected


def test_record_from_store_tolerates_odd_shapes():
    record = AttendanceRecord.from_store({"id": 42, "date": "2024-03-01", "status": "p", "extra": "x"})

    assert record.id == "42"
    assert record.class_id is None
    assert record.parsed_status is AttendanceStatus.PRESENT


def test_aggregate_document_keys():
    doc = AttendanceAggregate(date="2024-03-01", total_students=1, present=1, attendance_rate=100.0).to_document()

    assert sorted(doc) == sorted(
        ["date", "total_students", "present", "absent", "late", "excused", "attendance_rate"]
    )


def test_aggregate_from_document_drops_store_fields():
    agg = AttendanceAggregate.from_document({"date": "2024-03-01", "present": 3, "total_students": 3, "id": "x"})

    assert agg.present == 3
    assert agg.absent == 0
