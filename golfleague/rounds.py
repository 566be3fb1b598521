"""Round contribution calculator.

A team's contribution for a round is the average of its counting golfers:
strokes over par for a posted round, or today's running score while the
round is live. How many golfers count depends on the round and the
tournament stage:

    stage      rounds 1-2   rounds 3-4
    0 or 1         10            5
    2               5            5
    3               3            3

When ten golfers count the whole roster is averaged. Otherwise the best N
active golfers are selected. A team without enough active golfers takes
the worst contribution among eligible teams in its bracket.
"""

import logging
import math
from collections.abc import Sequence

from .constants import FULL_ROSTER_SELECTION, HOLES_PER_ROUND, SELECTION_COUNTS
from .models import PlayerRoundSnapshot, RoundContribution, Team, TournamentSnapshot
from .snapshot import SnapshotIndex
from .utils import mean

logger = logging.getLogger('golfleague.rounds')


def selection_count(stage: int, round_num: int) -> int:
    """Number of golfers whose scores count for a round at a tournament stage."""
    early, late = SELECTION_COUNTS[stage]
    return early if round_num <= 2 else late


def _round_value(player: PlayerRoundSnapshot, round_num: int, par: int, live: bool) -> float | None:
    if live:
        return player.today
    strokes = player.strokes(round_num)
    return None if strokes is None else strokes - par


def rank_for_round(
    players: Sequence[PlayerRoundSnapshot], round_num: int, par: int, live: bool
) -> list[PlayerRoundSnapshot]:
    """
    Order golfers best-first for a round.

    Sort key: today (live) or strokes over par (posted), then cumulative
    score, then player id. Missing values sort last.
    """

    def key(player: PlayerRoundSnapshot) -> tuple[float, float, int]:
        value = _round_value(player, round_num, par, live)
        return (
            math.inf if value is None else value,
            math.inf if player.score is None else player.score,
            player.player_id,
        )

    return sorted(players, key=key)


def pick_top(
    players: Sequence[PlayerRoundSnapshot], round_num: int, par: int, live: bool, count: int
) -> list[PlayerRoundSnapshot]:
    return rank_for_round(players, round_num, par, live)[:count]


class RoundCalculator:
    """
    Computes round contributions for every team of one tournament run.

    The calculator only reads the snapshot and index. The worst eligible
    contribution per bracket is computed once per (bracket, round, mode)
    and reused for every ineligible team.
    """

    def __init__(self, snapshot: TournamentSnapshot, index: SnapshotIndex, stage: int):
        """
        Initialize calculator.

        Args:
            snapshot: Tournament snapshot for this run
            index: Lookups built from the snapshot
            stage: 0 for regular season, 1-3 for playoff legs
        """
        self.snapshot = snapshot
        self.index = index
        self.stage = stage
        self.par = snapshot.context.par
        self._worst: dict[tuple[int, int, bool], RoundContribution] = {}

    def required(self, round_num: int) -> int:
        return selection_count(self.stage, round_num)

    def is_eligible(self, team: Team, round_num: int) -> bool:
        """A team counts for a round only with enough active golfers."""
        return bool(team.player_ids) and len(self.index.active[team.team_id]) >= self.required(
            round_num
        )

    def scoring_pool(self, team: Team, round_num: int, live: bool) -> list[PlayerRoundSnapshot]:
        """Golfers whose scores count for an eligible team."""
        required = self.required(round_num)
        if required >= FULL_ROSTER_SELECTION:
            return list(self.index.rosters[team.team_id])
        return pick_top(self.index.active[team.team_id], round_num, self.par, live, required)

    def own_contribution(self, team: Team, round_num: int, live: bool) -> RoundContribution:
        """Contribution from the team's own golfers (assumes it is eligible)."""
        pool = self.scoring_pool(team, round_num, live)
        if live:
            today = mean(p.today for p in pool)
            return RoundContribution(today=today, thru=mean(p.thru for p in pool), over_par=today)
        over_par = mean(_round_value(p, round_num, self.par, live=False) for p in pool)
        return RoundContribution(today=over_par, thru=HOLES_PER_ROUND, over_par=over_par)

    def worst_in_bracket(self, bracket: int, round_num: int, live: bool) -> RoundContribution:
        """
        Highest contribution among eligible teams sharing a penalty bracket.

        Falls back to 0 (thru 18 for posted rounds) when no team in the
        bracket is eligible or none has a value yet.
        """
        cache_key = (bracket, round_num, live)
        if cache_key in self._worst:
            return self._worst[cache_key]

        worst: RoundContribution | None = None
        for team in sorted(self.snapshot.teams, key=lambda t: t.team_id):
            if self.index.penalty_bracket_for(team) != bracket:
                continue
            if not self.is_eligible(team, round_num):
                continue
            candidate = self.own_contribution(team, round_num, live)
            if candidate.over_par is None:
                continue
            if worst is None or candidate.over_par > worst.over_par:
                worst = candidate

        if worst is None:
            worst = RoundContribution(
                today=0.0, thru=None if live else HOLES_PER_ROUND, over_par=0.0
            )

        self._worst[cache_key] = worst
        return worst

    def contribution(self, team: Team, round_num: int, live: bool) -> RoundContribution:
        """
        Contribution for one team and round.

        Args:
            team: Team to score
            round_num: Round 1-4
            live: Use today/thru (in-progress round) instead of posted strokes

        Returns:
            RoundContribution. Posted rounds set today = over_par and thru = 18.
        """
        if self.is_eligible(team, round_num):
            return self.own_contribution(team, round_num, live)

        bracket = self.index.penalty_bracket_for(team)
        fallback = self.worst_in_bracket(bracket, round_num, live)
        logger.debug(
            f'Team {team.team_id} ineligible for round {round_num} '
            f'({len(self.index.active[team.team_id])} active, need {self.required(round_num)}); '
            f'assigned {fallback.over_par}'
        )
        if live:
            return fallback
        return RoundContribution(
            today=fallback.over_par, thru=HOLES_PER_ROUND, over_par=fallback.over_par
        )

    def raw_round(self, team: Team, round_num: int) -> float | None:
        """Average raw strokes for a posted round (fallback + par for ineligible teams)."""
        if not self.is_eligible(team, round_num):
            fallback = self.contribution(team, round_num, live=False)
            return None if fallback.over_par is None else fallback.over_par + self.par
        pool = self.scoring_pool(team, round_num, live=False)
        return mean(p.strokes(round_num) for p in pool)
