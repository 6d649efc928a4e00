"""CSV / Excel rendering of attendance aggregates."""
import io

import pandas as pd

from app.models.attendance import AttendanceAggregate

REPORT_COLUMNS = {
    "date": "Date",
    "total_students": "Total Marked",
    "present": "Present",
    "absent": "Absent",
    "late": "Late",
    "excused": "Excused",
    "attendance_rate": "Attendance Rate (%)",
}

CSV_MEDIA_TYPE = "text/csv"
EXCEL_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def aggregates_to_frame(aggregates: list[AttendanceAggregate]) -> pd.DataFrame:
    df = pd.DataFrame([a.model_dump() for a in aggregates], columns=list(REPORT_COLUMNS))
    return df.rename(columns=REPORT_COLUMNS)


def render_csv(aggregates: list[AttendanceAggregate]) -> str:
    stream = io.StringIO()
    aggregates_to_frame(aggregates).to_csv(stream, index=False)
    return stream.getvalue()


def render_excel(aggregates: list[AttendanceAggregate]) -> io.BytesIO:
    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        aggregates_to_frame(aggregates).to_excel(writer, index=False, sheet_name="Attendance")
    output.seek(0)
    return output
