"""Snapshot assembly from league data and the per-run lookup index."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType

from . import schemas
from .config import get_config
from .constants import MAX_ROSTER_SIZE, NO_BRACKET, SILVER_BRACKET
from .exceptions import SnapshotError
from .models import (
    Participant,
    PlayerRoundSnapshot,
    Team,
    TierTable,
    TournamentContext,
    TournamentInfo,
    TournamentSnapshot,
)
from .playoffs import previous_playoff_event
from .schemas import LeagueConfig

logger = logging.getLogger('golfleague.snapshot')


def _player_from_record(record: schemas.TournamentGolfer) -> PlayerRoundSnapshot:
    return PlayerRoundSnapshot(
        player_id=record.golfer_id,
        position=record.position,
        score=record.score,
        today=record.today,
        thru=record.thru,
        rounds=(record.round_one, record.round_two, record.round_three, record.round_four),
        tee_times=(
            record.round_one_tee_time,
            record.round_two_tee_time,
            record.round_three_tee_time,
            record.round_four_tee_time,
        ),
    )


def _team_from_record(record: schemas.Team) -> Team:
    if len(record.golfer_ids) > MAX_ROSTER_SIZE:
        logger.warning(
            f'Team {record.id} lists {len(record.golfer_ids)} golfers (max {MAX_ROSTER_SIZE})'
        )
    return Team(
        team_id=record.id,
        participant_id=record.tour_card_id,
        player_ids=tuple(record.golfer_ids),
        position=record.position,
        past_position=record.past_position,
    )


def participant_from_record(record: schemas.TourCard) -> Participant:
    return Participant(
        participant_id=record.id,
        tour_id=record.tour_id,
        points=record.points,
        playoff=record.playoff,
    )


def tournament_infos(data: schemas.LeagueDataFile, season_id: str) -> tuple[TournamentInfo, ...]:
    """Schedule entries for one season, tagged with their tier names."""
    tier_names = {tier.id: tier.name for tier in data.tiers}
    return tuple(
        TournamentInfo(
            tournament_id=t.id,
            season_id=t.season_id,
            start_date=t.start_date,
            end_date=t.end_date,
            tier_name=tier_names.get(t.tier_id, ''),
            status=t.status,
            live_play=t.live_play,
        )
        for t in data.tournaments
        if t.season_id == season_id
    )


def build_snapshot(
    data: schemas.LeagueDataFile,
    tournament_id: str,
    config: LeagueConfig | None = None,
) -> TournamentSnapshot:
    """
    Assemble the immutable snapshot for one tournament run.

    Args:
        data: Validated league data export
        tournament_id: Tournament to score
        config: League settings (default: loaded config)

    Returns:
        TournamentSnapshot with context, teams, season participants,
        golfer feed and the preceding playoff leg's final scores

    Raises:
        SnapshotError: If the tournament, its course or its tier is missing
    """
    config = config or get_config()

    tournament = next((t for t in data.tournaments if t.id == tournament_id), None)
    if tournament is None:
        raise SnapshotError(f'Tournament not found: {tournament_id}', tournament_id)

    course = next((c for c in data.courses if c.id == tournament.course_id), None)
    if course is None:
        raise SnapshotError(
            f'Course {tournament.course_id} not found for tournament {tournament_id}',
            tournament_id,
        )
    if course.par is None:
        raise SnapshotError(
            f'Course {course.id} has no par for tournament {tournament_id}',
            tournament_id,
        )

    tier = next((t for t in data.tiers if t.id == tournament.tier_id), None)
    if tier is None:
        raise SnapshotError(
            f'Tier {tournament.tier_id} not found for tournament {tournament_id}',
            tournament_id,
        )

    context = TournamentContext(
        tournament_id=tournament.id,
        season_id=tournament.season_id,
        current_round=tournament.current_round or 1,
        live_play=tournament.live_play,
        par=course.par,
        tier=TierTable(name=tier.name, points=tuple(tier.points), payouts=tuple(tier.payouts)),
        start_date=tournament.start_date,
    )

    season_tournaments = tournament_infos(data, tournament.season_id)

    prior_scores: dict[str, float] = {}
    previous = previous_playoff_event(
        tournament.id, tier.name, season_tournaments, config.playoff_tier_keyword
    )
    if previous is not None:
        for team in data.teams:
            if team.tournament_id == previous.tournament_id:
                prior_scores[team.tour_card_id] = team.score if team.score is not None else 0.0
        logger.debug(
            f'Loaded {len(prior_scores)} carry-in scores from {previous.tournament_id}'
        )

    return TournamentSnapshot(
        context=context,
        teams=tuple(_team_from_record(t) for t in data.teams if t.tournament_id == tournament_id),
        participants=tuple(
            participant_from_record(c)
            for c in data.tour_cards
            if c.season_id == tournament.season_id
        ),
        players=tuple(
            _player_from_record(g)
            for g in data.tournament_golfers
            if g.tournament_id == tournament_id
        ),
        season_tournaments=season_tournaments,
        prior_scores=MappingProxyType(prior_scores),
    )


@dataclass(frozen=True)
class SnapshotIndex:
    """
    Read-only lookups built once per run and shared by every sub-computation.

    rosters holds each team's golfers that appear in the feed (in roster
    order); active holds the subset still eligible to play.
    """

    participants: Mapping[str, Participant]
    players: Mapping[int, PlayerRoundSnapshot]
    rosters: Mapping[str, tuple[PlayerRoundSnapshot, ...]]
    active: Mapping[str, tuple[PlayerRoundSnapshot, ...]]

    @classmethod
    def build(cls, snapshot: TournamentSnapshot) -> 'SnapshotIndex':
        participants = {p.participant_id: p for p in snapshot.participants}
        players = {p.player_id: p for p in snapshot.players}

        rosters = {}
        active = {}
        for team in snapshot.teams:
            # First occurrence wins, matching the run's de-duplication
            if team.team_id in rosters:
                continue
            roster = tuple(players[pid] for pid in team.player_ids if pid in players)
            rosters[team.team_id] = roster
            active[team.team_id] = tuple(p for p in roster if p.is_active)

        return cls(
            participants=MappingProxyType(participants),
            players=MappingProxyType(players),
            rosters=MappingProxyType(rosters),
            active=MappingProxyType(active),
        )

    def participant_for(self, team: Team) -> Participant | None:
        return self.participants.get(team.participant_id)

    def bracket_for(self, team: Team) -> int:
        """Playoff bracket flag for the team's participant (0 when none)."""
        participant = self.participant_for(team)
        return participant.bracket if participant else NO_BRACKET

    def penalty_bracket_for(self, team: Team) -> int:
        participant = self.participant_for(team)
        return participant.penalty_bracket if participant else SILVER_BRACKET
