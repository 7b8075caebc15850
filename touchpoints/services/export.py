"""
CSV export of raw touchpoint records
"""
import csv
import io
from datetime import date, datetime
from typing import Any, Dict, List

WORKFLOWS = {
    "website-visits": "website",
    "store-visits": "store",
    "login-signup": "signup",
}


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def columns_for(rows: List[Dict[str, Any]]) -> List[str]:
    """Column names in first-seen order across all rows"""
    seen: Dict[str, None] = {}
    for row in rows:
        for key in row:
            seen.setdefault(key, None)
    return list(seen)


def to_csv(rows: List[Dict[str, Any]]) -> str:
    """
    Header row plus one line per record

    A value is quoted only when it contains a comma, a quote or a line break;
    embedded quotes are doubled.
    """
    columns = columns_for(rows)
    buf = io.StringIO()
    writer = csv.writer(buf, quoting=csv.QUOTE_MINIMAL, lineterminator="\r\n")
    writer.writerow(columns)
    for row in rows:
        writer.writerow([_cell(row.get(col)) for col in columns])
    return buf.getvalue()


def parse_csv(text: str) -> List[Dict[str, str]]:
    """Inverse of to_csv: every value comes back as the string that was written"""
    reader = csv.reader(io.StringIO(text, newline=""))
    try:
        header = next(reader)
    except StopIteration:
        return []
    return [dict(zip(header, values)) for values in reader]


def export_filename(workflow: str, now: datetime) -> str:
    return f"{workflow}-export-{now.strftime('%Y-%m-%dT%H-%M-%SZ')}.csv"
