"""Delimited-text parsing for the published teams sheet.

The sheet is exported either with commas or semicolons (depending on the
locale of whoever publishes it), optionally with quoted fields. Quoting is
handled with a plain toggle: an embedded ``""`` is not an escaped quote.
"""

from typing import Dict, List

from loguru import logger

RawRecord = Dict[str, str]

QUOTE_CHAR = '"'
DEFAULT_DELIMITER = ","


def sniff_delimiter(first_line: str) -> str:
    """Chooses the field separator from the header line.

    Comma wins over semicolon when both appear; quoted content is not
    taken into account.
    """
    if "," in first_line:
        return ","
    if ";" in first_line:
        return ";"
    return DEFAULT_DELIMITER


def _clean_field(value: str) -> str:
    if value.startswith(QUOTE_CHAR):
        value = value[1:]
    if value.endswith(QUOTE_CHAR):
        value = value[:-1]
    return value.strip()


def tokenize_line(line: str, delimiter: str) -> List[str]:
    """Splits one line into fields, honouring quoted sections.

    Returns at least one field: an empty line yields ``[""]`` and a
    trailing delimiter yields a trailing empty field.
    """
    fields: List[str] = []
    current: List[str] = []
    in_quotes = False

    for char in line:
        if char == QUOTE_CHAR:
            in_quotes = not in_quotes
        elif char == delimiter and not in_quotes:
            fields.append("".join(current))
            current = []
        else:
            current.append(char)

    fields.append("".join(current))
    return [_clean_field(field) for field in fields]


def parse_table(text: str) -> List[RawRecord]:
    """Parses raw delimited text into header-keyed records.

    Blank lines are dropped before the header is picked. Short rows are
    padded with empty strings, extra trailing fields are ignored.
    """
    lines = [line.rstrip("\r") for line in text.split("\n")]
    lines = [line for line in lines if line.strip() != ""]

    if not lines:
        logger.debug("No non-empty lines in delimited text, returning no records.")
        return []

    delimiter = sniff_delimiter(lines[0])
    headers = tokenize_line(lines[0], delimiter)
    logger.debug(
        f"Parsing {len(lines) - 1} data line(s) with delimiter {delimiter!r} and {len(headers)} header(s)"
    )

    records: List[RawRecord] = []
    for line in lines[1:]:
        values = tokenize_line(line, delimiter)
        record: RawRecord = {}
        for index, header in enumerate(headers):
            record[header] = values[index] if index < len(values) else ""
        records.append(record)

    return records
