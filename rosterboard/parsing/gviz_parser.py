import json
import re
from typing import Any, Dict

from loguru import logger

# The gviz/tq endpoint answers with JavaScript, not plain JSON
GVIZ_ENVELOPE_PATTERN = re.compile(
    r"google\.visualization\.Query\.setResponse\((.*)\);", re.DOTALL
)


class GvizParseError(Exception):
    """Raised when a Google Visualization response cannot be unwrapped."""

    pass


def unwrap_gviz_response(text: str) -> Dict[str, Any]:
    """Extracts and decodes the JSON object wrapped in a setResponse(...) call."""
    match = GVIZ_ENVELOPE_PATTERN.search(text)
    if not match:
        logger.warning(
            "Google Visualization envelope not found in response.",
            response_preview=text[:200],
        )
        raise GvizParseError("Invalid response from Google Sheets")

    try:
        payload = json.loads(match.group(1))
    except json.JSONDecodeError as e:
        raise GvizParseError(f"Could not decode Google Visualization JSON: {e}") from e

    if not isinstance(payload, dict):
        raise GvizParseError(
            f"Expected a JSON object inside the envelope, got {type(payload).__name__}"
        )
    return payload
