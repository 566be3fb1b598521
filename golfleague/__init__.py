from .models import (
    Participant,
    PlayerRoundSnapshot,
    Team,
    TierTable,
    TournamentContext,
    TournamentSnapshot,
    TeamUpdate,
    ParticipantStanding,
    RunOutcome,
)
from .exceptions import SnapshotError
from .rounds import RoundCalculator, selection_count
from .playoffs import resolve_event_index, seeding_strokes, carry_in_baseline
from .aggregator import score_team
from .positions import assign_positions, parse_position, tie_labels
from .payouts import award_tournament, distribute
from .standings import compute_standings
from .snapshot import build_snapshot, SnapshotIndex
from .engine import run_tournament, run_season_standings

__all__ = [
    # Models
    'Participant',
    'PlayerRoundSnapshot',
    'Team',
    'TierTable',
    'TournamentContext',
    'TournamentSnapshot',
    'TeamUpdate',
    'ParticipantStanding',
    'RunOutcome',
    'SnapshotError',
    # Round contributions
    'RoundCalculator',
    'selection_count',
    # Playoffs
    'resolve_event_index',
    'seeding_strokes',
    'carry_in_baseline',
    # Aggregation, ranking and awards
    'score_team',
    'assign_positions',
    'parse_position',
    'tie_labels',
    'award_tournament',
    'distribute',
    'compute_standings',
    # Snapshot
    'build_snapshot',
    'SnapshotIndex',
    # Runs
    'run_tournament',
    'run_season_standings',
]
