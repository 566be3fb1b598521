"""Season standings rollup."""

from collections import defaultdict
from collections.abc import Iterable, Sequence

from .constants import CUT_LABEL, FINAL_ROUND, GOLD_BRACKET, NO_BRACKET, SILVER_BRACKET
from .models import Participant, ParticipantStanding, TeamResult
from .positions import parse_position, tie_labels
from .schemas import LeagueConfig
from .utils import round_half_up


def completed_results(results: Iterable[TeamResult]) -> list[TeamResult]:
    """Results from tournaments that have finished (round past 4)."""
    return [r for r in results if (r.round or 0) >= FINAL_ROUND]


def summarize(results: Sequence[TeamResult]) -> dict:
    """Counting stats for one participant over their completed tournaments."""
    completed = completed_results(results)
    ranks = [parse_position(r.position) for r in completed]
    return {
        'wins': sum(1 for rank in ranks if rank == 1),
        'top_ten': sum(1 for rank in ranks if rank is not None and rank <= 10),
        'made_cut': sum(1 for r in completed if r.position != CUT_LABEL),
        'appearances': len(completed),
        'earnings': sum(r.earnings or 0 for r in completed),
        'points': sum(round_half_up(r.points or 0) for r in completed),
    }


def playoff_flag(better_count: int, config: LeagueConfig) -> int:
    """Bracket qualification from the number of participants strictly ahead."""
    if better_count < config.gold_cutoff:
        return GOLD_BRACKET
    if better_count < config.silver_cutoff:
        return SILVER_BRACKET
    return NO_BRACKET


def compute_standings(
    participants: Sequence[Participant],
    results: Iterable[TeamResult],
    config: LeagueConfig,
) -> list[ParticipantStanding]:
    """
    Recompute every participant's season standing from scratch.

    Participants are ranked within their tour by total points (highest
    first) with T-prefixed labels for ties. Gold qualification covers the
    top gold_cutoff ranks, silver up to silver_cutoff.

    Args:
        participants: Season participants (tour cards)
        results: Team results across the season
        config: League settings

    Returns:
        Standings ordered by tour, rank, then participant id
    """
    by_participant: dict[str, list[TeamResult]] = defaultdict(list)
    for result in results:
        by_participant[result.participant_id].append(result)

    by_tour: dict[str, list[tuple[Participant, dict]]] = defaultdict(list)
    for participant in participants:
        totals = summarize(by_participant.get(participant.participant_id, []))
        by_tour[participant.tour_id].append((participant, totals))

    standings: list[ParticipantStanding] = []
    for tour_id in sorted(by_tour):
        entries = by_tour[tour_id]
        labels = tie_labels(
            ((p.participant_id, totals['points']) for p, totals in entries), descending=True
        )
        for participant, totals in entries:
            better = sum(1 for _, other in entries if other['points'] > totals['points'])
            standings.append(
                ParticipantStanding(
                    participant_id=participant.participant_id,
                    tour_id=tour_id,
                    current_position=labels[participant.participant_id],
                    playoff=playoff_flag(better, config),
                    **totals,
                )
            )

    standings.sort(
        key=lambda s: (s.tour_id, parse_position(s.current_position) or 0, s.participant_id)
    )
    return standings
