"""Command-line entry point for scheduled team and standings updates.

Usage:
    python autoscorer.py teams --data data/league.json
    python autoscorer.py teams --data data/league.json --tournament-id t_123 --output out/teams.json
    python autoscorer.py standings --data data/league.json --year 2026
"""

import argparse
import logging
import sys
from datetime import datetime, timezone
from pathlib import Path

from .constants import SKIP_NO_ACTIVE_TOURNAMENT, SKIP_NO_CURRENT_SEASON
from .engine import run_season_standings, run_tournament
from .exceptions import SnapshotError
from .logging_config import setup_logging
from .models import RunOutcome, SeasonInfo, TeamResult
from .schedule import find_active_tournament, select_current_season
from .schemas import LeagueDataFile
from .snapshot import build_snapshot, participant_from_record, tournament_infos
from .utils import load_json, save_json

logger = logging.getLogger('golfleague.cli')


def load_league_data(path: str | Path) -> LeagueDataFile:
    """Load and validate a league data export."""
    return load_json(path, schema=LeagueDataFile)


def update_teams(
    data: LeagueDataFile,
    tournament_id: str | None = None,
    now: float | None = None,
) -> RunOutcome:
    """
    Score the requested tournament, or the active one when none is given.

    Raises:
        SnapshotError: If the tournament's course or tier is missing
    """
    if tournament_id is None:
        if now is None:
            now = datetime.now(timezone.utc).timestamp() * 1000
        candidates = [
            info
            for season_id in dict.fromkeys(t.season_id for t in data.tournaments)
            for info in tournament_infos(data, season_id)
        ]
        active = find_active_tournament(candidates, now)
        if active is None:
            logger.info('No active tournament, skipping team update')
            return RunOutcome.skip(SKIP_NO_ACTIVE_TOURNAMENT)
        tournament_id = active.tournament_id

    snapshot = build_snapshot(data, tournament_id)
    return run_tournament(snapshot)


def update_standings(data: LeagueDataFile, year: int | None = None) -> RunOutcome:
    """Recompute standings for the season of the given (default: current) year."""
    if year is None:
        year = datetime.now(timezone.utc).year

    seasons = [SeasonInfo(season_id=s.id, year=s.year, number=s.number) for s in data.seasons]
    season = select_current_season(seasons, year)
    if season is None:
        logger.info(f'No season for {year}, skipping standings')
        return RunOutcome.skip(SKIP_NO_CURRENT_SEASON)

    cards = [c for c in data.tour_cards if c.season_id == season.season_id]
    card_ids = {c.id for c in cards}
    results = [
        TeamResult(
            participant_id=t.tour_card_id,
            round=t.round,
            position=t.position,
            points=t.points,
            earnings=t.earnings,
        )
        for t in data.teams
        if t.tour_card_id in card_ids
    ]
    return run_season_standings(
        [participant_from_record(c) for c in cards], results, season_id=season.season_id
    )


def write_outcome(outcome: RunOutcome, output_path: Path) -> None:
    payload = outcome.to_dict()
    payload['scored_at'] = datetime.now(timezone.utc).isoformat()
    save_json(output_path, payload)
    logger.info(f'Results saved to {output_path}')


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description='Fantasy golf team scoring and standings')
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Enable debug logging',
    )
    parser.add_argument(
        '--log-dir',
        default=None,
        help='Directory for log files (default: no log file)',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    teams_parser = subparsers.add_parser('teams', help='Recompute team scores for a tournament')
    teams_parser.add_argument('--data', '-d', required=True, help='Path to league data JSON')
    teams_parser.add_argument(
        '--tournament-id', '-t',
        default=None,
        help='Tournament to score (defaults to the active tournament)',
    )
    teams_parser.add_argument(
        '--output', '-o',
        default='output/teams.json',
        help='Output path for team updates JSON',
    )

    standings_parser = subparsers.add_parser('standings', help='Recompute season standings')
    standings_parser.add_argument('--data', '-d', required=True, help='Path to league data JSON')
    standings_parser.add_argument(
        '--year', '-y',
        type=int,
        default=None,
        help='Season year (defaults to the current year)',
    )
    standings_parser.add_argument(
        '--output', '-o',
        default='output/standings.json',
        help='Output path for standings JSON',
    )

    args = parser.parse_args(argv)

    setup_logging(
        log_dir=Path(args.log_dir) if args.log_dir else None,
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_to_file=args.log_dir is not None,
    )

    data = load_league_data(args.data)

    if args.command == 'teams':
        try:
            outcome = update_teams(data, args.tournament_id)
        except SnapshotError as e:
            logger.error(f'Team update aborted: {e}')
            return 1
    else:
        outcome = update_standings(data, args.year)

    if outcome.skipped:
        logger.info(f'Skipped: {outcome.reason}')

    write_outcome(outcome, Path(args.output))
    return 0


if __name__ == '__main__':
    sys.exit(main())
