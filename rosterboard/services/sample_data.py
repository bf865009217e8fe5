# rosterboard/services/sample_data.py
# Canned data shown when the spreadsheet cannot be read.
from typing import List

from rosterboard.models.document import Document
from rosterboard.models.summary import Summary
from rosterboard.models.team import Discipline, Player, Team


def sample_teams() -> List[Team]:
    return [
        Team(
            id=1,
            name="ZPW 3B",
            short_name="ZPW",
            class_name="3B",
            players=[
                Player(name="Aleksander Dąbek", is_captain=True, number=1),
                Player(name="Jan Zawadzki", is_captain=False, number=2),
                Player(name="Tomasz Mazur", is_captain=False, number=3),
            ],
            disciplines=[
                Discipline(name="Koszykówka", points=15),
                Discipline(name="Siatkówka", points=12),
                Discipline(name="Piłka nożna", points=18),
            ],
            total_points=45,
            # Registered squad size; only part of the roster is listed
            total_players=7,
            captain="Aleksander Dąbek",
        )
    ]


def sample_summary() -> Summary:
    return Summary(total_teams=1, total_players=7, champion_team="ZPW 3B")


def fallback_documents() -> List[Document]:
    return [
        Document(
            id="1",
            name="Regulamin rozgrywek",
            description="Pełny regulamin rozgrywek międzyklasowych",
            file_url="#",
            file_type="PDF",
        ),
        Document(
            id="2",
            name="Formularz zgłoszeniowy",
            description="Zgłoś swoją drużynę do rozgrywek",
            file_url="#",
            file_type="FORM",
        ),
    ]
