"""Playoff leg detection and per-team starting strokes."""

import logging
from collections.abc import Iterable, Mapping, Sequence

from .constants import GOLD_BRACKET, NO_BRACKET, PLAYOFF_LEGS, REGULAR_SEASON
from .models import Participant, Team, TournamentInfo
from .schemas import LeagueConfig
from .utils import round_decimal

logger = logging.getLogger('golfleague.playoffs')


def is_playoff_tier(tier_name: str | None, keyword: str) -> bool:
    """A tier is a playoff tier when its name contains the keyword (any case)."""
    return keyword.lower() in (tier_name or '').lower()


def playoff_schedule(
    season_tournaments: Iterable[TournamentInfo], keyword: str
) -> list[TournamentInfo]:
    """Playoff tournaments of a season in start order (id breaks same-day ties)."""
    events = [t for t in season_tournaments if is_playoff_tier(t.tier_name, keyword)]
    return sorted(events, key=lambda t: (t.start_date, t.tournament_id))


def resolve_event_index(
    tournament_id: str,
    tier_name: str | None,
    season_tournaments: Iterable[TournamentInfo],
    keyword: str,
) -> int:
    """
    Determine which playoff leg a tournament is.

    Args:
        tournament_id: Tournament being scored
        tier_name: Name of the tournament's tier
        season_tournaments: All tournaments in the same season
        keyword: Tier-name marker for playoff tiers

    Returns:
        0 for a regular-season event, otherwise the 1-based leg number
        capped at 3. A playoff tournament missing from the schedule is
        treated as the first leg.
    """
    if not is_playoff_tier(tier_name, keyword):
        return REGULAR_SEASON

    schedule = playoff_schedule(season_tournaments, keyword)
    for position, event in enumerate(schedule):
        if event.tournament_id == tournament_id:
            return min(PLAYOFF_LEGS[-1], position + 1)
    return PLAYOFF_LEGS[0]


def previous_playoff_event(
    tournament_id: str,
    tier_name: str | None,
    season_tournaments: Sequence[TournamentInfo],
    keyword: str,
) -> TournamentInfo | None:
    """The playoff leg immediately before this one, or None for leg 1 and regular events."""
    event_index = resolve_event_index(tournament_id, tier_name, season_tournaments, keyword)
    if event_index < 2:
        return None
    schedule = playoff_schedule(season_tournaments, keyword)
    return schedule[event_index - 2]


def seeding_strokes(
    participant: Participant,
    field: Iterable[Participant],
    tier_points: Sequence[float],
    config: LeagueConfig,
) -> float:
    """
    Starting strokes for a participant in the first playoff leg.

    Participants in the same bracket are ranked by season points; the
    participant's rank k (number of strictly better peers) indexes the
    tier's points table, used as a strokes table. Tied participants share
    the average of their slice, rounded to one decimal.

    Args:
        participant: Participant being seeded
        field: Participants with a team in this tournament
        tier_points: The playoff tier's points table
        config: League settings (slice lengths per bracket)

    Returns:
        Starting strokes, 0 for participants outside both brackets
    """
    bracket = participant.bracket
    if bracket == NO_BRACKET:
        return 0.0

    group = [p for p in field if p.bracket == bracket]
    better = sum(1 for p in group if p.points > participant.points)
    tied = sum(1 for p in group if p.points == participant.points)

    slots = config.gold_seeding_slots if bracket == GOLD_BRACKET else config.silver_seeding_slots
    strokes = list(tier_points[:slots])

    if tied > 1:
        tied_slice = strokes[better:better + tied]
        return round_decimal(sum(tied_slice) / tied) or 0.0
    return strokes[better] if better < len(strokes) else 0.0


def carry_in_baseline(
    team: Team,
    event_index: int,
    participants: Mapping[str, Participant],
    field: Sequence[Participant],
    tier_points: Sequence[float],
    prior_scores: Mapping[str, float],
    config: LeagueConfig,
) -> float:
    """
    A team's starting score before any round of this tournament counts.

    Regular-season events start from 0; the first playoff leg from the
    bracket seeding strokes; later legs from the team's final score in the
    previous leg (0 when the team did not play it).
    """
    if event_index == REGULAR_SEASON:
        return 0.0

    if event_index == 1:
        participant = participants.get(team.participant_id)
        if participant is None:
            return 0.0
        return seeding_strokes(participant, field, tier_points, config)

    carried = prior_scores.get(team.participant_id)
    if carried is None:
        logger.debug(f'No previous playoff score for {team.participant_id}, starting at 0')
        return 0.0
    return carried
