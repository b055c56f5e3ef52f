"""
Parser for the county/canvassing lead exports.

The export is not RFC 4180: a double quote only toggles "inside quotes"
(escaped quotes are not supported) and every field is trimmed. The import
endpoint and the import preview both go through this module so the user
sees exactly what will be imported.

Expected columns:
    Name              "LastName FirstName [Middle...]"
    Address           "Street, City, State, Zip" (every part optional)
    Latitude          float, unparseable -> None
    Longitude         float, unparseable -> None
    Occupancy_Status  -> Lead.source as "{value}-Occupied"
    Occupancy_Reason  -> Lead.description
"""
import math
import re
from typing import Dict, List, Optional, Tuple

LINE_SPLIT = re.compile(r"\r?\n")

PREVIEW_ROWS = 5


def parse_csv_line(line: str) -> List[str]:
    result = []
    current = []
    in_quotes = False

    for char in line:
        if char == '"':
            in_quotes = not in_quotes
        elif char == "," and not in_quotes:
            result.append("".join(current).strip())
            current = []
        else:
            current.append(char)

    result.append("".join(current).strip())
    return result


def split_lines(content: str) -> List[str]:
    return [line for line in LINE_SPLIT.split(content) if line.strip()]


def parse_csv(content: str) -> Tuple[List[str], List[Dict[str, str]]]:
    """
    Returns (headers, rows). Rows map header -> value, missing trailing
    values become "". A file with no data line yields no rows.
    """
    lines = split_lines(content)
    if len(lines) < 2:
        return [], []

    headers = parse_csv_line(lines[0])
    rows = []
    for line in lines[1:]:
        values = parse_csv_line(line)
        rows.append({
            header: (values[i] if i < len(values) else "")
            for i, header in enumerate(headers)
        })

    return headers, rows


def parse_name(name: str) -> Dict[str, str]:
    # Surname comes first in the export
    parts = name.split()
    if not parts:
        return {"first_name": "", "last_name": ""}
    if len(parts) == 1:
        return {"first_name": parts[0], "last_name": ""}
    return {"first_name": " ".join(parts[1:]), "last_name": parts[0]}


def parse_address(address: str) -> Dict[str, str]:
    parts = [p.strip() for p in address.split(",")]
    parts += [""] * (4 - len(parts))
    return {
        "street": parts[0],
        "city": parts[1],
        "state": parts[2],
        "zip_code": parts[3],
    }


def parse_coordinate(value: Optional[str]) -> Optional[float]:
    if not value:
        return None
    try:
        number = float(value)
    except ValueError:
        return None
    return number if math.isfinite(number) else None


def row_to_lead_fields(row: Dict[str, str]) -> Optional[dict]:
    """Lead columns for one CSV row, or None when the row has no Name."""
    name = row.get("Name") or ""
    if not name:
        return None

    occupancy_status = row.get("Occupancy_Status") or ""
    occupancy_reason = row.get("Occupancy_Reason") or ""

    fields = {}
    fields.update(parse_name(name))
    fields.update(parse_address(row.get("Address") or ""))
    fields["latitude"] = parse_coordinate(row.get("Latitude"))
    fields["longitude"] = parse_coordinate(row.get("Longitude"))
    fields["source"] = f"{occupancy_status}-Occupied" if occupancy_status else None
    fields["description"] = occupancy_reason or None
    return fields


def preview_rows(content: str, limit: int = PREVIEW_ROWS) -> dict:
    headers, rows = parse_csv(content)
    head = rows[:limit]
    return {
        "headers": headers,
        "rows": head,
        "leads": [row_to_lead_fields(r) for r in head],
        "total_rows": len(rows),
    }
