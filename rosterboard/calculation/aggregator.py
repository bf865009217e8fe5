from typing import List

from loguru import logger

from rosterboard.models.summary import NO_DATA_PLACEHOLDER, Summary
from rosterboard.models.team import Team


def find_champion(teams: List[Team]) -> str:
    """
    Returns the name of the team with the most points.

    Ties go to the team seen first: ``sorted`` is stable, also with
    ``reverse=True``, so equal scores keep their original order.
    """
    if not teams:
        return NO_DATA_PLACEHOLDER
    ranked = sorted(teams, key=lambda team: team.total_points, reverse=True)
    return ranked[0].name


def calculate_summary(teams: List[Team]) -> Summary:
    """Derives the dashboard summary from finalized teams."""
    summary = Summary(
        total_teams=len(teams),
        total_players=sum(team.total_players for team in teams),
        champion_team=find_champion(teams),
    )
    logger.debug(
        f"Summary: {summary.total_teams} team(s), {summary.total_players} player(s), champion '{summary.champion_team}'"
    )
    return summary
