import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from loguru import logger

from rosterboard.models.document import Document

DEFAULT_NAME = "Brak nazwy"
DEFAULT_DESCRIPTION = "Brak opisu"
DEFAULT_FILE_URL = "#"
DEFAULT_FILE_TYPE = "PDF"

# Column order of the documents sheet
ID_COL, NAME_COL, DESCRIPTION_COL, URL_COL, TYPE_COL, DATE_COL = range(6)

# Date cells come back as JavaScript literals, month is zero-based
GVIZ_DATE_PATTERN = re.compile(r"^Date\((\d+(?:,\s*\d+)*)\)$")


def _cell_value(cells: List[Any], index: int) -> Any:
    if index >= len(cells):
        return None
    cell = cells[index]
    if not isinstance(cell, dict):
        return None
    value = cell.get("v")
    # Number cells always arrive as JSON floats
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def parse_sheet_date(raw: Any) -> Optional[datetime]:
    """Parses a GViz ``Date(y,m,d[,h,mi,s])`` literal or an ISO date string."""
    if raw is None or raw == "":
        return None
    text = str(raw).strip()

    match = GVIZ_DATE_PATTERN.match(text)
    if match:
        parts = [int(p) for p in match.group(1).split(",")]
        year = parts[0]
        month = parts[1] + 1 if len(parts) > 1 else 1
        rest = parts[2:] + [1, 0, 0, 0][len(parts[2:]) :]
        day, hour, minute, second = rest[:4]
        try:
            return datetime(year, month, day, hour, minute, second)
        except ValueError:
            logger.debug(f"Out of range GViz date literal: {text}")
            return None

    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        logger.debug(f"Unrecognised document date: {text}")
        return None
    if parsed.tzinfo is not None:
        # Keep everything naive UTC so dates stay comparable
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_documents(payload: Dict[str, Any]) -> List[Document]:
    """Maps GViz table rows to documents, newest first.

    Rows without a name are dropped. Missing dates sort as the oldest.
    """
    table = payload.get("table") or {}
    rows = table.get("rows") or []

    documents: List[Document] = []
    for index, row in enumerate(rows):
        cells = row.get("c") if isinstance(row, dict) else None
        if not isinstance(cells, list):
            logger.warning(f"Skipping malformed document row {index}.")
            continue

        name = _cell_value(cells, NAME_COL) or DEFAULT_NAME
        if name == DEFAULT_NAME:
            logger.debug(f"Skipping document row {index} without a name.")
            continue

        raw_date = _cell_value(cells, DATE_COL)
        documents.append(
            Document(
                id=str(_cell_value(cells, ID_COL) or index + 1),
                name=str(name),
                description=str(_cell_value(cells, DESCRIPTION_COL) or DEFAULT_DESCRIPTION),
                file_url=str(_cell_value(cells, URL_COL) or DEFAULT_FILE_URL),
                file_type=str(_cell_value(cells, TYPE_COL) or DEFAULT_FILE_TYPE),
                raw_date=str(raw_date) if raw_date else None,
                date=parse_sheet_date(raw_date),
            )
        )

    # Stable: documents with the same (or no) date keep sheet order
    documents.sort(key=lambda d: d.date or datetime.min, reverse=True)
    logger.info(f"Parsed {len(documents)} document(s) from {len(rows)} row(s).")
    return documents
