from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import DisciplineName


class Player(BaseModel):
    """A single roster entry belonging to exactly one team."""

    name: str
    is_captain: bool = False
    number: int  # 1-based, assigned in append order within the team


class Discipline(BaseModel):
    """A sport the team takes part in, with its score."""

    name: str
    points: float = 0


DEFAULT_DISCIPLINES: List[DisciplineName] = [
    DisciplineName.BASKETBALL,
    DisciplineName.VOLLEYBALL,
    DisciplineName.FOOTBALL,
]


def default_disciplines() -> List[Discipline]:
    return [Discipline(name=d.value, points=0) for d in DEFAULT_DISCIPLINES]


class Team(BaseModel):
    """Represents a class team built up from one or more spreadsheet rows."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str  # "<short_name> <class>"
    short_name: str
    class_name: str = Field(..., alias="class")
    players: List[Player] = []
    disciplines: List[Discipline] = []
    total_points: float = 0
    total_players: int = 0
    captain: Optional[str] = None

    # Participation flags read from the row that created the team
    basketball: bool = False
    volleyball: bool = False
    football: bool = False

    def finalize(self) -> None:
        """Applies default disciplines and recomputes the derived totals."""
        if not self.disciplines:
            self.disciplines = default_disciplines()
        self.total_players = len(self.players)
        self.total_points = sum(d.points or 0 for d in self.disciplines)
