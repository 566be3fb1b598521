"""Points and payouts from tier tables."""

import logging
from collections import defaultdict
from collections.abc import Mapping, Sequence

from .constants import FINAL_PLAYOFF_LEG, FINAL_ROUND, GOLD_BRACKET, REGULAR_SEASON, SILVER_BRACKET
from .models import Award, TeamScore, TierTable
from .positions import parse_position
from .schemas import LeagueConfig
from .utils import round_half_up

logger = logging.getLogger('golfleague.payouts')


def average_award(table: Sequence[float], start: int, count: int) -> float:
    """
    Mean of count consecutive table entries from start.

    Entries past the end of the table count as 0, so ranks beyond the
    paid places receive nothing.
    """
    if count <= 0:
        return 0.0
    total = sum(table[i] if 0 <= i < len(table) else 0 for i in range(start, start + count))
    return total / count


def group_by_rank(team_ids: Sequence[str], labels: Mapping[str, str]) -> dict[int, list[str]]:
    """Team ids grouped by numeric rank, ranks ascending; CUT and unlabelled teams are left out."""
    groups: dict[int, list[str]] = defaultdict(list)
    for team_id in team_ids:
        rank = parse_position(labels.get(team_id))
        if rank is None or rank <= 0:
            continue
        groups[rank].append(team_id)
    return dict(sorted(groups.items()))


def distribute(
    team_ids: Sequence[str],
    labels: Mapping[str, str],
    tier: TierTable,
    offset: int = 0,
    with_points: bool = True,
) -> dict[str, Award]:
    """
    Tie-averaged awards for one group of teams sharing a ranking.

    When count teams tie at rank p each gets the mean of the count table
    entries from index p - 1 + offset, rounded to the nearest integer.

    Args:
        team_ids: Teams ranked together (one bracket, or the whole field)
        labels: Finish labels by team id
        tier: Points and payouts tables
        offset: Index shift into the tables for a secondary bracket
        with_points: Award points as well as earnings (otherwise points are 0)

    Returns:
        Dict mapping team id to Award for every ranked team
    """
    awards: dict[str, Award] = {}
    for rank, tied in group_by_rank(team_ids, labels).items():
        start = rank - 1 + offset
        count = len(tied)
        points = round_half_up(average_award(tier.points, start, count)) if with_points else 0
        earnings = round_half_up(average_award(tier.payouts, start, count))
        for team_id in tied:
            awards[team_id] = Award(points=points, earnings=earnings)
    return awards


def award_tournament(
    scores: Sequence[TeamScore],
    labels: Mapping[str, str],
    tier: TierTable,
    stage: int,
    round_state: int,
    config: LeagueConfig,
) -> dict[str, Award]:
    """
    Points and earnings for every team of a run.

    Regular season: points and earnings from the tier tables, offset 0;
    unranked teams get nothing set. Playoff legs pay no points; only the
    final round of the last leg pays earnings, per bracket, with the
    silver bracket shifted into the combined payouts table.

    Returns:
        Dict mapping team id to Award for every team
    """
    team_ids = [s.team_id for s in scores]

    if stage == REGULAR_SEASON:
        awards = distribute(team_ids, labels, tier)
        return {team_id: awards.get(team_id, Award()) for team_id in team_ids}

    if stage == FINAL_PLAYOFF_LEG and round_state == FINAL_ROUND:
        gold = [s.team_id for s in scores if s.bracket == GOLD_BRACKET]
        silver = [s.team_id for s in scores if s.bracket == SILVER_BRACKET]
        awards = distribute(gold, labels, tier, offset=0, with_points=False)
        awards.update(
            distribute(silver, labels, tier, offset=config.silver_payout_offset, with_points=False)
        )
        logger.info(f'Final playoff leg: paid {len(awards)} teams')
        return {team_id: awards.get(team_id, Award(points=0)) for team_id in team_ids}

    return {team_id: Award(points=0, earnings=0) for team_id in team_ids}
