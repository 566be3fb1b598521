"""Tournament and season selection for scheduled runs."""

from collections.abc import Sequence

from .models import SeasonInfo, TournamentInfo


def find_active_tournament(
    tournaments: Sequence[TournamentInfo], now: float
) -> TournamentInfo | None:
    """
    Pick the tournament a scheduled team update should score.

    Preference order: a tournament marked active, then one with live play
    on, then one whose dates contain now.

    Args:
        tournaments: Candidate tournaments
        now: Current time in epoch milliseconds

    Returns:
        The tournament to score, or None when nothing is in progress
    """
    for tournament in tournaments:
        if tournament.status == 'active':
            return tournament

    for tournament in tournaments:
        if tournament.live_play:
            return tournament

    for tournament in tournaments:
        if tournament.end_date is None:
            continue
        if tournament.start_date <= now <= tournament.end_date:
            return tournament

    return None


def select_current_season(seasons: Sequence[SeasonInfo], year: int) -> SeasonInfo | None:
    """The season for a calendar year; the highest season number wins when there are several."""
    candidates = [s for s in seasons if s.year == year]
    if not candidates:
        return None
    return max(candidates, key=lambda s: s.number)
