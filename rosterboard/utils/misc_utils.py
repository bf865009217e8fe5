# rosterboard/utils/misc_utils.py
from typing import Iterable, Mapping


def generate_team_key(team_name: str, class_name: str) -> str:
    """Builds the grouping key for a team. Exact and case-sensitive."""
    return f"{team_name}_{class_name}"


def first_present(record: Mapping[str, str], aliases: Iterable[str]) -> str:
    """Returns the first non-empty value among the given header aliases, or ''."""
    for alias in aliases:
        value = record.get(alias)
        if value:
            return value
    return ""


def is_flag_set(value: str, accepted: Iterable[str]) -> bool:
    """Exact-match check of a spreadsheet checkbox value."""
    return value in tuple(accepted)
