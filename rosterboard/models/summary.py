from typing import Dict, List

from pydantic import BaseModel

from .team import Team

# Shown as champion when no team has been loaded
NO_DATA_PLACEHOLDER = "Brak danych"


class Summary(BaseModel):
    """Cross-team totals, recomputed on every load."""

    total_teams: int = 0
    total_players: int = 0
    champion_team: str = NO_DATA_PLACEHOLDER


class LoadResult(BaseModel):
    """What the data service hands to the presentation layer."""

    teams: List[Team] = []
    summary: Summary = Summary()
    from_sample: bool = False


class SkippedRow(BaseModel):
    """Diagnostic event emitted for each spreadsheet row dropped during grouping."""

    row_index: int  # 0-based position in the parsed record sequence
    reason: str
    record: Dict[str, str]
