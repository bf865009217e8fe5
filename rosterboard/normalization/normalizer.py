from typing import Dict, List, Sequence, Tuple

from loguru import logger

from rosterboard.models.enums import DisciplineName
from rosterboard.models.summary import SkippedRow
from rosterboard.models.team import Discipline, Player, Team
from rosterboard.parsing.csv_parser import RawRecord
from rosterboard.utils.misc_utils import first_present, generate_team_key, is_flag_set

# Accepted header spellings per logical field, tried in order.
# Adding a spelling only requires extending the tuple.
FIELD_ALIASES: Dict[str, Tuple[str, ...]] = {
    "team_name": ("Nazwa", "Nazwa drużyny"),
    "class_name": ("Klasa",),
    "first_name": ("Imie", "Imię"),
    "last_name": ("Nazwisko",),
    "captain": ("Kapitan",),
}

# Discipline -> (accepted column headers, Team flag attribute)
DISCIPLINE_COLUMNS: List[Tuple[DisciplineName, Tuple[str, ...], str]] = [
    (DisciplineName.BASKETBALL, ("Koszykówka",), "basketball"),
    (DisciplineName.VOLLEYBALL, ("Siatkówka",), "volleyball"),
    (DisciplineName.FOOTBALL, ("Piłka Nożna",), "football"),
]

CAPTAIN_TRUE_VALUES = ("TRUE", "true")
DISCIPLINE_TRUE_VALUES = ("TRUE",)


class Normalizer:
    """Groups parsed spreadsheet rows into Team objects keyed by (name, class)."""

    def __init__(
        self,
        field_aliases: Dict[str, Tuple[str, ...]] = FIELD_ALIASES,
        discipline_columns: Sequence[
            Tuple[DisciplineName, Tuple[str, ...], str]
        ] = DISCIPLINE_COLUMNS,
    ):
        self.field_aliases = field_aliases
        self.discipline_columns = list(discipline_columns)
        # Diagnostic events from the most recent normalize() call
        self.skipped_rows: List[SkippedRow] = []

    def normalize(self, records: Sequence[RawRecord]) -> List[Team]:
        """Folds records into teams in first-seen order and finalizes them.

        Rows without a team name or class are skipped (and recorded in
        ``skipped_rows``); they never create a team or add a player.
        """
        self.skipped_rows = []
        teams_by_key: Dict[str, Team] = {}

        logger.info(f"Starting team normalization for {len(records)} row(s).")

        for row_index, record in enumerate(records):
            team_name = self._field(record, "team_name")
            class_name = self._field(record, "class_name")

            if not team_name or not class_name:
                self._record_skip(row_index, record, "missing team name or class")
                continue

            first_name = self._field(record, "first_name")
            last_name = self._field(record, "last_name")
            is_captain = is_flag_set(self._field(record, "captain"), CAPTAIN_TRUE_VALUES)

            key = generate_team_key(team_name, class_name)
            team = teams_by_key.get(key)
            if team is None:
                team = self._create_team(
                    len(teams_by_key) + 1, team_name, class_name, record
                )
                teams_by_key[key] = team
                logger.debug(f"Created team {team.id}: '{team.name}'")

            player_name = f"{first_name} {last_name}".strip()
            team.players.append(
                Player(
                    name=player_name,
                    is_captain=is_captain,
                    number=len(team.players) + 1,
                )
            )

            if is_captain:
                # Last captain-marked row wins
                team.captain = player_name

            team.disciplines = self._disciplines_for_row(team, record)

        teams = list(teams_by_key.values())
        for team in teams:
            team.finalize()

        logger.info(
            f"Normalization complete. Produced {len(teams)} team(s), skipped {len(self.skipped_rows)} row(s)."
        )
        return teams

    def _field(self, record: RawRecord, field: str) -> str:
        return first_present(record, self.field_aliases.get(field, ()))

    def _row_flag(self, record: RawRecord, columns: Tuple[str, ...]) -> bool:
        return is_flag_set(first_present(record, columns), DISCIPLINE_TRUE_VALUES)

    def _create_team(
        self, team_id: int, team_name: str, class_name: str, record: RawRecord
    ) -> Team:
        team = Team(
            id=team_id,
            name=f"{team_name} {class_name}",
            short_name=team_name,
            class_name=class_name,
        )
        for _, columns, flag_attr in self.discipline_columns:
            setattr(team, flag_attr, self._row_flag(record, columns))
        return team

    def _disciplines_for_row(self, team: Team, record: RawRecord) -> List[Discipline]:
        """Participation from this row OR the team's persisted flags; points reset to 0."""
        disciplines: List[Discipline] = []
        seen = set()
        for discipline, columns, flag_attr in self.discipline_columns:
            if self._row_flag(record, columns) or getattr(team, flag_attr, False):
                if discipline.value in seen:
                    continue
                seen.add(discipline.value)
                disciplines.append(Discipline(name=discipline.value, points=0))
        return disciplines

    def _record_skip(self, row_index: int, record: RawRecord, reason: str) -> None:
        event = SkippedRow(row_index=row_index, reason=reason, record=dict(record))
        self.skipped_rows.append(event)
        logger.bind(event="row_skipped", row_index=row_index, record=event.record).warning(
            f"Skipping row {row_index}: {reason}"
        )
