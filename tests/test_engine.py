"""Tests for full tournament and standings runs."""

import pytest

from golfleague.engine import run_season_standings, run_tournament
from golfleague.models import (
    Award,
    Participant,
    PlayerRoundSnapshot,
    Team,
    TeamResult,
    TierTable,
    TournamentContext,
    TournamentInfo,
    TournamentSnapshot,
)
from golfleague.schemas import LeagueConfig

STANDARD = TierTable(name='Standard', points=(500, 300, 200), payouts=(50000, 30000, 20000))
PLAYOFF = TierTable(name='Playoff', points=(10, 8, 6, 4), payouts=(1000, 500))


@pytest.fixture
def config():
    return LeagueConfig()


def roster(first_id, strokes, cut_from=None):
    """Ten golfers shooting the same score every round; golfers from cut_from on are CUT."""
    return [
        PlayerRoundSnapshot(
            player_id=first_id + i,
            position='CUT' if cut_from is not None and i >= cut_from else None,
            rounds=(strokes,) * 4,
        )
        for i in range(10)
    ]


def build(
    rosters,
    current_round,
    tier=STANDARD,
    brackets=None,
    points=None,
    season=(),
    prior=None,
    positions=None,
):
    """Snapshot for tournament t1 with one participant tc-<team> per team."""
    brackets = brackets or {}
    points = points or {}
    positions = positions or {}
    teams = tuple(
        Team(
            team_id=team_id,
            participant_id=f'tc-{team_id}',
            player_ids=tuple(p.player_id for p in golfers),
            position=positions.get(team_id),
        )
        for team_id, golfers in rosters.items()
    )
    participants = tuple(
        Participant(
            participant_id=f'tc-{team_id}',
            tour_id='tour',
            points=points.get(team_id, 0.0),
            playoff=brackets.get(team_id, 0),
        )
        for team_id in rosters
    )
    context = TournamentContext(
        tournament_id='t1',
        season_id='s1',
        current_round=current_round,
        live_play=False,
        par=72,
        tier=tier,
    )
    return TournamentSnapshot(
        context=context,
        teams=teams,
        participants=participants,
        players=tuple(p for golfers in rosters.values() for p in golfers),
        season_tournaments=tuple(season),
        prior_scores=prior or {},
    )


def playoff_season(*tournament_ids):
    return [
        TournamentInfo(tournament_id=tid, season_id='s1', start_date=100 * (i + 1), tier_name='Playoff')
        for i, tid in enumerate(tournament_ids)
    ]


@pytest.fixture
def regular_final():
    return build(
        {
            'A': roster(1, 70),
            'B': roster(11, 72),
            'C': roster(21, 72),
            'D': roster(31, 68, cut_from=4),
        },
        current_round=5,
        positions={'A': '3'},
    )


class TestRegularSeason:
    """Tests for a completed regular-season tournament."""

    def test_positions_and_awards(self, regular_final, config):
        """Test ranks, tie-averaged awards and the cut team."""
        outcome = run_tournament(regular_final, config)
        assert not outcome.skipped
        assert outcome.target_id == 't1'
        by_team = {u.team_id: u for u in outcome.records}

        assert by_team['A'].position == '1'
        assert by_team['A'].score == pytest.approx(-8.0)
        assert (by_team['A'].points, by_team['A'].earnings) == (500, 50000)

        for team_id in ('B', 'C'):
            assert by_team[team_id].position == 'T2'
            assert (by_team[team_id].points, by_team[team_id].earnings) == (250, 25000)

        assert by_team['D'].position == 'CUT'
        assert (by_team['D'].points, by_team['D'].earnings) == (None, None)

    def test_cut_team_rounds_from_worst_team(self, regular_final, config):
        """Test the cut team's early rounds come from the worst eligible team."""
        outcome = run_tournament(regular_final, config)
        record = next(u for u in outcome.records if u.team_id == 'D').to_record()
        assert record['round_one'] == pytest.approx(72.0)
        assert record['round_two'] == pytest.approx(72.0)
        assert record['round_three'] is None
        assert record['score'] is None

    def test_past_position(self, regular_final, config):
        """Test a changed label moves into past_position."""
        outcome = run_tournament(regular_final, config)
        team_a = next(u for u in outcome.records if u.team_id == 'A')
        assert team_a.past_position == '3'

    def test_no_warnings(self, regular_final, config):
        """Test a consistent run raises no validation warnings."""
        assert run_tournament(regular_final, config).warnings == ()

    def test_deterministic(self, regular_final, config):
        """Test the same snapshot always yields the same records."""
        first = run_tournament(regular_final, config).to_dict()
        second = run_tournament(regular_final, config).to_dict()
        assert first == second

    def test_team_order_does_not_change_results(self, regular_final, config):
        """Test reversing team order leaves every record unchanged."""
        reversed_snapshot = TournamentSnapshot(
            context=regular_final.context,
            teams=tuple(reversed(regular_final.teams)),
            participants=regular_final.participants,
            players=regular_final.players,
        )
        forward = {u.team_id: u for u in run_tournament(regular_final, config).records}
        backward = {u.team_id: u for u in run_tournament(reversed_snapshot, config).records}
        assert forward == backward


class TestPlayoffs:
    """Tests for playoff legs."""

    def test_first_leg_seeding(self, config):
        """Test leg 1 starts from seeding strokes and ranks each bracket separately."""
        snapshot = build(
            {
                'A': roster(1, 72),
                'B': roster(11, 72),
                'S': roster(21, 72),
                'X': roster(31, 72),
            },
            current_round=2,
            tier=PLAYOFF,
            brackets={'A': 1, 'B': 1, 'S': 2},
            points={'A': 100, 'B': 90, 'S': 50, 'X': 10},
            season=playoff_season('t1', 't2', 't3'),
        )
        outcome = run_tournament(snapshot, config)
        by_team = {u.team_id: u for u in outcome.records}

        # Gold: A is seeded first (10 strokes), B second (8 strokes)
        assert by_team['A'].score == pytest.approx(10.0)
        assert by_team['B'].score == pytest.approx(8.0)
        assert by_team['B'].position == '1'
        assert by_team['A'].position == '2'
        assert by_team['S'].score == pytest.approx(10.0)
        assert by_team['S'].position == '1'

        assert by_team['X'].position is None
        for update in outcome.records:
            assert Award(update.points, update.earnings) == Award(points=0, earnings=0)

    def test_later_leg_carries_previous_score(self, config):
        """Test leg 2 starts from the previous leg's final score."""
        snapshot = build(
            {'A': roster(1, 72), 'B': roster(11, 72)},
            current_round=2,
            tier=PLAYOFF,
            brackets={'A': 1, 'B': 1},
            season=playoff_season('t0', 't1', 't2'),
            prior={'tc-A': -3.0},
        )
        by_team = {u.team_id: u for u in run_tournament(snapshot, config).records}
        assert by_team['A'].score == pytest.approx(-3.0)
        assert by_team['B'].score == pytest.approx(0.0)

    def test_final_leg_pays_earnings(self, config):
        """Test the last leg's final round pays earnings without points."""
        snapshot = build(
            {'A': roster(1, 70), 'B': roster(11, 72)},
            current_round=5,
            tier=PLAYOFF,
            brackets={'A': 1, 'B': 1},
            season=playoff_season('p1', 'p2', 't1'),
        )
        by_team = {u.team_id: u for u in run_tournament(snapshot, config).records}
        assert (by_team['A'].points, by_team['A'].earnings) == (0, 1000)
        assert (by_team['B'].points, by_team['B'].earnings) == (0, 500)

    def test_depleted_playoff_team_not_cut(self, config):
        """Test playoff teams keep a position even with few active golfers."""
        snapshot = build(
            {'A': roster(1, 72), 'B': roster(11, 72, cut_from=2)},
            current_round=3,
            tier=PLAYOFF,
            brackets={'A': 1, 'B': 1},
            season=playoff_season('t1'),
        )
        by_team = {u.team_id: u for u in run_tournament(snapshot, config).records}
        assert by_team['B'].position != 'CUT'
        assert by_team['B'].score is not None


class TestSkips:
    """Tests for skipped runs."""

    def test_no_teams(self, config):
        """Test a tournament without teams is skipped."""
        outcome = run_tournament(build({}, current_round=1), config)
        assert outcome.skipped
        assert outcome.reason == 'no_teams'
        assert outcome.to_dict()['records'] == []

    def test_duplicate_team_scored_once(self, config):
        """Test a repeated team id yields a single update scored with the first roster."""
        snapshot = build({'A': roster(1, 70)}, current_round=2)
        second_roster = roster(11, 80)
        second = Team(
            team_id='A',
            participant_id='tc-A',
            player_ids=tuple(p.player_id for p in second_roster),
        )
        duplicated = TournamentSnapshot(
            context=snapshot.context,
            teams=snapshot.teams + (second,),
            participants=snapshot.participants,
            players=snapshot.players + tuple(second_roster),
        )
        outcome = run_tournament(duplicated, config)
        assert [u.team_id for u in outcome.records] == ['A']

        line = outcome.records[0].line
        assert line.posted_rounds == (pytest.approx(70.0),)
        assert line.today == pytest.approx(-2.0)

    def test_no_tour_cards(self, config):
        """Test standings are skipped for a season without participants."""
        outcome = run_season_standings([], [], season_id='s1', config=config)
        assert outcome.skipped
        assert outcome.reason == 'no_tour_cards'
        assert outcome.target_id == 's1'


class TestSeasonStandings:
    """Tests for the standings run."""

    def test_records(self, config):
        """Test every participant gets a standing record."""
        participants = [
            Participant(participant_id='a', tour_id='tour'),
            Participant(participant_id='b', tour_id='tour'),
        ]
        results = [
            TeamResult(participant_id='a', round=5, position='1', points=500, earnings=50000),
            TeamResult(participant_id='b', round=5, position='2', points=300, earnings=30000),
        ]
        outcome = run_season_standings(participants, results, season_id='s1', config=config)
        records = outcome.to_dict()['records']
        assert [r['participant_id'] for r in records] == ['a', 'b']
        assert records[0]['wins'] == 1
        assert records[1]['current_position'] == '2'
