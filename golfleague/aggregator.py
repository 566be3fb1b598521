"""Team score aggregation across rounds."""

import logging
from collections.abc import Sequence
from datetime import datetime

from .constants import FINAL_ROUND, HOLES_PER_ROUND, REGULAR_SEASON, ROUNDS, TEE_TIME_RANK
from .models import (
    CutLine,
    FinalLine,
    InProgressLine,
    OpeningRoundLine,
    PlayerRoundSnapshot,
    ScoreLine,
    Team,
    TeamScore,
    TournamentContext,
)
from .rounds import RoundCalculator
from .schemas import LeagueConfig
from .utils import mean, round_decimal

logger = logging.getLogger('golfleague.aggregator')


def earliest_tee_time(times: Sequence[str | None], rank: int = 1) -> str | None:
    """
    The rank-th earliest tee time (1-based) among the present values.

    Times are compared chronologically when every value parses as an ISO
    datetime, otherwise as plain strings.
    """
    present = [t for t in times if t and t.strip()]
    if not present:
        return None
    rank = max(1, rank)

    try:
        ordered = sorted(present, key=datetime.fromisoformat)
    except ValueError:
        ordered = sorted(present)
    except TypeError:
        # Mixed naive and aware datetimes
        ordered = sorted(present)

    return ordered[rank - 1] if rank <= len(ordered) else None


def round_tee_times(roster: Sequence[PlayerRoundSnapshot], round_state: int) -> tuple[str | None, ...]:
    """Representative tee time per round; rounds 3-4 only once they have been reached."""
    result = []
    for round_num in ROUNDS:
        if round_num >= 3 and round_state < round_num:
            result.append(None)
            continue
        times = [p.tee_time(round_num) for p in roster]
        result.append(earliest_tee_time(times, TEE_TIME_RANK[round_num]))
    return tuple(result)


def is_cut(active_count: int, stage: int, round_state: int, config: LeagueConfig) -> bool:
    """Regular-season teams are cut from round 3 with too few active golfers."""
    return stage == REGULAR_SEASON and round_state >= 3 and active_count < config.cut_min_active


def _posted_total(calc: RoundCalculator, team: Team, rounds: range) -> float:
    """Sum of posted over-par contributions; absent rounds add nothing."""
    total = 0.0
    for round_num in rounds:
        over_par = calc.contribution(team, round_num, live=False).over_par
        if over_par is not None:
            total += over_par
    return total


def _running(base: float, posted: float, today: float | None) -> float:
    return base + posted + (today or 0.0)


def build_score_line(
    team: Team,
    calc: RoundCalculator,
    context: TournamentContext,
    stage: int,
    base: float,
    config: LeagueConfig,
) -> ScoreLine:
    """
    Select and fill the output shape for one team.

    Rounds before the current one are always posted. The current round is
    live (today/thru from the feed) when live play is on, otherwise it is
    treated as complete. Once the tournament is final all four rounds are
    posted.

    Args:
        team: Team to score
        calc: Round calculator for this run
        context: Tournament context
        stage: 0 for regular season, 1-3 for playoff legs
        base: Carry-in strokes
        config: League settings

    Returns:
        One of CutLine, OpeningRoundLine, InProgressLine, FinalLine
    """
    r = context.round_state
    live = context.live_play
    active_count = len(calc.index.active[team.team_id])

    if is_cut(active_count, stage, r, config):
        return CutLine(
            round_one=round_decimal(calc.raw_round(team, 1)),
            round_two=round_decimal(calc.raw_round(team, 2)),
        )

    if r == FINAL_ROUND:
        last = calc.contribution(team, 4, live=False)
        return FinalLine(
            posted_rounds=tuple(round_decimal(calc.raw_round(team, n)) for n in ROUNDS),
            today=round_decimal(last.over_par),
            thru=HOLES_PER_ROUND,
            score=round_decimal(base + _posted_total(calc, team, range(1, 5))),
        )

    if r == 1:
        if not live:
            return OpeningRoundLine()
        current = calc.contribution(team, 1, live=True)
        if stage == REGULAR_SEASON:
            # Regular-season teams lead off with their golfers' cumulative average
            score = mean(p.score for p in calc.index.rosters[team.team_id])
        else:
            score = _running(base, 0.0, current.today)
        return OpeningRoundLine(
            today=round_decimal(current.today),
            thru=round_decimal(current.thru),
            score=round_decimal(score),
        )

    posted_rounds = tuple(round_decimal(calc.raw_round(team, n)) for n in range(1, r))
    prior = _posted_total(calc, team, range(1, r))

    if live:
        current = calc.contribution(team, r, live=True)
        return InProgressLine(
            posted_rounds=posted_rounds,
            today=round_decimal(current.today),
            thru=round_decimal(current.thru),
            score=round_decimal(_running(base, prior, current.today)),
        )

    # Between rounds: the last completed round is what "today" shows
    last = calc.contribution(team, r - 1, live=False)
    return InProgressLine(
        posted_rounds=posted_rounds,
        today=round_decimal(last.over_par),
        thru=HOLES_PER_ROUND,
        score=round_decimal(base + prior),
    )


def score_team(
    team: Team,
    calc: RoundCalculator,
    context: TournamentContext,
    stage: int,
    base: float,
    config: LeagueConfig,
) -> TeamScore:
    """Aggregate one team's score line, bracket and tee times."""
    return TeamScore(
        team_id=team.team_id,
        participant_id=team.participant_id,
        bracket=calc.index.bracket_for(team),
        round=context.round_state,
        line=build_score_line(team, calc, context, stage, base, config),
        tee_times=round_tee_times(calc.index.rosters[team.team_id], context.round_state),
    )
