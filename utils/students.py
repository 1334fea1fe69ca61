import logging
from typing import List, Optional, Tuple

from utils.audit import DataUnavailable, parse_timestamp

logger = logging.getLogger(__name__)


def fetch_student(client, student_id) -> Optional[dict]:
    """Return the `students` row for `student_id`, or None if there is none."""
    if not student_id:
        return None
    try:
        res = client.table("students").select("*").eq("id", student_id).limit(1).execute()
    except Exception as e:
        logger.error("Failed to fetch student %s: %s", student_id, e)
        raise DataUnavailable(f"Failed to load student: {e}") from e
    rows = res.data or []
    return rows[0] if rows else None


def format_short_date(value) -> str:
    if not value:
        return "-"
    dt = parse_timestamp(value)
    return dt.strftime("%d/%m/%Y")


def contact_lines(student: dict) -> List[Tuple[str, str]]:
    return [
        ("الهاتف المحمول", student.get("mobile_phone") or "-"),
        ("هاتف ولي الأمر", student.get("parent_phone") or "-"),
        ("المدينة", student.get("city") or "-"),
    ]


def registration_lines(student: dict) -> List[Tuple[str, str]]:
    return [
        ("تاريخ الإنشاء", format_short_date(student.get("created_at"))),
    ]
