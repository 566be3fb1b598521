"""Unit tests for playoff leg detection and carry-in strokes."""

import pytest

from golfleague.models import Participant, Team, TournamentInfo
from golfleague.playoffs import (
    carry_in_baseline,
    is_playoff_tier,
    playoff_schedule,
    previous_playoff_event,
    resolve_event_index,
    seeding_strokes,
)
from golfleague.schemas import LeagueConfig

TIER_POINTS = [10, 8, 6, 4, 2, 1]


def event(tournament_id, start, tier='Playoff'):
    return TournamentInfo(tournament_id=tournament_id, season_id='s1', start_date=start, tier_name=tier)


@pytest.fixture
def season():
    """Four playoff legs scheduled out of order plus two regular events."""
    return [
        event('p3', 300),
        event('r1', 50, tier='Standard'),
        event('p1', 100),
        event('p4', 400),
        event('p2', 200),
        event('r2', 250, tier='Major'),
    ]


@pytest.fixture
def config():
    return LeagueConfig()


def participant(participant_id, points, bracket=1):
    return Participant(participant_id=participant_id, tour_id='tour', points=points, playoff=bracket)


class TestEventIndex:
    """Tests for resolving the playoff leg."""

    def test_playoff_tier_keyword(self):
        """Test tier names match the keyword case-insensitively."""
        assert is_playoff_tier('PGA Playoffs', 'playoff')
        assert not is_playoff_tier('Major', 'playoff')
        assert not is_playoff_tier(None, 'playoff')

    def test_schedule_sorted_by_start(self, season):
        """Test only playoff tournaments are kept, in start order."""
        schedule = playoff_schedule(season, 'playoff')
        assert [t.tournament_id for t in schedule] == ['p1', 'p2', 'p3', 'p4']

    def test_regular_event(self, season):
        """Test a non-playoff tier is the regular season."""
        assert resolve_event_index('r1', 'Standard', season, 'playoff') == 0

    @pytest.mark.parametrize('tournament_id,expected', [('p1', 1), ('p2', 2), ('p3', 3), ('p4', 3)])
    def test_leg_numbers(self, season, tournament_id, expected):
        """Test legs count from 1 in start order and cap at 3."""
        assert resolve_event_index(tournament_id, 'Playoff', season, 'playoff') == expected

    def test_unscheduled_playoff_is_first_leg(self, season):
        """Test a playoff tournament absent from the schedule counts as leg 1."""
        assert resolve_event_index('p9', 'Playoff', season, 'playoff') == 1

    def test_previous_event(self, season):
        """Test the preceding leg is found for legs after the first."""
        assert previous_playoff_event('p3', 'Playoff', season, 'playoff').tournament_id == 'p2'
        assert previous_playoff_event('p1', 'Playoff', season, 'playoff') is None
        assert previous_playoff_event('r1', 'Standard', season, 'playoff') is None


class TestSeeding:
    """Tests for first-leg starting strokes."""

    def test_rank_indexes_points_table(self, config):
        """Test one better participant gives the second table entry."""
        field = [participant('a', 100), participant('b', 90)]
        assert seeding_strokes(field[1], field, TIER_POINTS, config) == 8
        assert seeding_strokes(field[0], field, TIER_POINTS, config) == 10

    def test_ties_share_slice_average(self, config):
        """Test tied participants average their slice of the table."""
        field = [participant('a', 100), participant('b', 90), participant('c', 90), participant('d', 80)]
        assert seeding_strokes(field[1], field, TIER_POINTS, config) == pytest.approx(7.0)
        assert seeding_strokes(field[2], field, TIER_POINTS, config) == pytest.approx(7.0)
        assert seeding_strokes(field[3], field, TIER_POINTS, config) == 4

    def test_tie_average_rounded_to_one_decimal(self, config):
        """Test a three-way tie average is rounded to one decimal."""
        field = [participant(pid, 50) for pid in ('a', 'b', 'c')]
        assert seeding_strokes(field[0], field, [10, 8, 7], config) == pytest.approx(8.3)

    def test_brackets_seeded_separately(self, config):
        """Test a silver participant is ranked only against silver peers."""
        field = [participant('g', 500, bracket=1), participant('s', 100, bracket=2)]
        assert seeding_strokes(field[1], field, TIER_POINTS, config) == 10

    def test_outside_brackets_start_at_zero(self, config):
        """Test non-qualified participants get no strokes."""
        p = participant('x', 100, bracket=0)
        assert seeding_strokes(p, [p], TIER_POINTS, config) == 0.0

    def test_beyond_slots(self):
        """Test ranks past the bracket's slots start at zero."""
        config = LeagueConfig(gold_seeding_slots=2)
        field = [participant('a', 3), participant('b', 2), participant('c', 1)]
        assert seeding_strokes(field[2], field, TIER_POINTS, config) == 0.0


class TestCarryIn:
    """Tests for a team's starting score."""

    def setup_method(self):
        self.team = Team(team_id='team-a', participant_id='a', player_ids=(1, 2, 3))
        self.field = [participant('a', 100), participant('b', 200)]
        self.participants = {p.participant_id: p for p in self.field}

    def test_regular_season_starts_at_zero(self, config):
        """Test regular-season teams carry nothing in."""
        base = carry_in_baseline(self.team, 0, self.participants, self.field, TIER_POINTS, {}, config)
        assert base == 0.0

    def test_first_leg_uses_seeding(self, config):
        """Test leg 1 starts from the bracket seeding strokes."""
        base = carry_in_baseline(self.team, 1, self.participants, self.field, TIER_POINTS, {}, config)
        assert base == 8

    def test_later_leg_carries_previous_score(self, config):
        """Test legs 2-3 start from the previous leg's final score."""
        prior = {'a': -5.5}
        base = carry_in_baseline(self.team, 2, self.participants, self.field, TIER_POINTS, prior, config)
        assert base == -5.5

    def test_later_leg_without_previous_score(self, config):
        """Test a team that skipped the previous leg starts at zero."""
        base = carry_in_baseline(self.team, 3, self.participants, self.field, TIER_POINTS, {}, config)
        assert base == 0.0
