"""Tournament team scoring and season standings runs.

Each run is a pure transformation: it reads one snapshot, performs no I/O
and returns either a skipped outcome or the full list of records for the
persistence sink. Loading and storing are left to the caller.
"""

import logging
from collections.abc import Iterable, Sequence

from .aggregator import score_team
from .config import get_config
from .constants import SKIP_NO_TEAMS, SKIP_NO_TOUR_CARDS
from .models import Participant, RunOutcome, TeamResult, TeamUpdate, TournamentSnapshot
from .payouts import award_tournament
from .playoffs import carry_in_baseline, resolve_event_index
from .positions import assign_positions, next_past_position
from .rounds import RoundCalculator
from .schemas import LeagueConfig
from .snapshot import SnapshotIndex
from .standings import compute_standings
from .validators import validate_updates

logger = logging.getLogger('golfleague.engine')


def run_tournament(
    snapshot: TournamentSnapshot, config: LeagueConfig | None = None
) -> RunOutcome:
    """
    Score every team of a tournament.

    Args:
        snapshot: Immutable tournament snapshot
        config: League settings (default: loaded config)

    Returns:
        RunOutcome with one TeamUpdate per team, or skipped with reason
        'no_teams' when the tournament has no teams
    """
    config = config or get_config()
    context = snapshot.context

    if not snapshot.teams:
        logger.info(f'Tournament {context.tournament_id} has no teams, skipping')
        return RunOutcome.skip(SKIP_NO_TEAMS, context.tournament_id)

    stage = resolve_event_index(
        context.tournament_id,
        context.tier.name,
        snapshot.season_tournaments,
        config.playoff_tier_keyword,
    )
    round_state = context.round_state

    logger.info(
        f'Scoring tournament {context.tournament_id}: {len(snapshot.teams)} teams, '
        f'event index {stage}, round {round_state}, live={context.live_play}'
    )

    index = SnapshotIndex.build(snapshot)
    calc = RoundCalculator(snapshot, index, stage)

    # Participants with a team here form the seeding field
    entered = {t.participant_id for t in snapshot.teams}
    field = [p for p in snapshot.participants if p.participant_id in entered]

    teams = []
    seen = set()
    for team in snapshot.teams:
        if team.team_id in seen:
            logger.warning(f'Duplicate team {team.team_id} in snapshot, keeping the first')
            continue
        seen.add(team.team_id)
        teams.append(team)

    scores = []
    for team in teams:
        base = carry_in_baseline(
            team,
            stage,
            index.participants,
            field,
            context.tier.points,
            snapshot.prior_scores,
            config,
        )
        scores.append(score_team(team, calc, context, stage, base, config))

    labels = assign_positions(scores, stage)
    awards = award_tournament(scores, labels, context.tier, stage, round_state, config)

    updates = []
    for team, score in zip(teams, scores):
        position = labels.get(team.team_id)
        award = awards[team.team_id]
        updates.append(
            TeamUpdate(
                team_id=team.team_id,
                round=score.round,
                line=score.line,
                position=position,
                past_position=next_past_position(team.position, team.past_position, position),
                points=award.points,
                earnings=award.earnings,
                tee_times=score.tee_times,
            )
        )

    brackets = {s.team_id: s.bracket for s in scores}
    warnings = validate_updates(updates, stage, round_state, brackets)
    for warning in warnings:
        logger.warning(warning)

    logger.info(f'Tournament {context.tournament_id}: {len(updates)} team updates')
    return RunOutcome(
        skipped=False,
        target_id=context.tournament_id,
        records=tuple(updates),
        warnings=tuple(warnings),
    )


def run_season_standings(
    participants: Sequence[Participant],
    results: Iterable[TeamResult],
    season_id: str | None = None,
    config: LeagueConfig | None = None,
) -> RunOutcome:
    """
    Recompute season standings for every participant.

    Returns:
        RunOutcome with one ParticipantStanding per participant, or skipped
        with reason 'no_tour_cards' when the season has no participants
    """
    config = config or get_config()

    if not participants:
        logger.info(f'Season {season_id} has no tour cards, skipping standings')
        return RunOutcome.skip(SKIP_NO_TOUR_CARDS, season_id)

    standings = compute_standings(participants, results, config)
    logger.info(f'Season {season_id}: {len(standings)} standings updated')
    return RunOutcome(skipped=False, target_id=season_id, records=tuple(standings))
