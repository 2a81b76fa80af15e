import csv
import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

from .logger import get_logger

logger = get_logger()


def stringify(value: Any) -> str:
    """Render a decoded JSON value as a CSV cell."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer() and abs(value) < 1e21:
            return str(int(value))
        return repr(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value, sort_keys=True, ensure_ascii=False, separators=(",", ":"))
    return str(value)


def derive_columns(records: Sequence[Dict[str, Any]]) -> List[str]:
    """Union of keys across all records, in first-seen order."""
    columns: List[str] = []
    seen = set()
    for record in records:
        for key in record:
            if key not in seen:
                seen.add(key)
                columns.append(key)
    return columns


def write_records(
    records: Sequence[Dict[str, Any]],
    path: Path,
    columns: Optional[Sequence[str]] = None,
) -> bool:
    """
    Write records to a CSV file: header row, then one row per record.

    Returns False without touching the filesystem when there are no
    records, and False when the file cannot be written.
    """
    path = Path(path)
    if not records:
        logger.error("No records to write; cannot derive CSV header", path=str(path))
        return False

    header = list(columns) if columns is not None else derive_columns(records)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(header)
            for record in records:
                writer.writerow([stringify(record.get(key)) for key in header])
    except OSError as e:
        logger.error("Error writing CSV file", path=str(path), error=str(e))
        return False

    logger.info(f"Wrote {len(records)} rows", path=str(path), columns=len(header))
    return True
