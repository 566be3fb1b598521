"""Unit tests for tournament and season selection."""

from golfleague.models import SeasonInfo, TournamentInfo
from golfleague.schedule import find_active_tournament, select_current_season

DAY_MS = 24 * 60 * 60 * 1000


def info(tournament_id, start, end=None, status=None, live=False):
    return TournamentInfo(
        tournament_id=tournament_id,
        season_id='s1',
        start_date=start,
        end_date=end,
        status=status,
        live_play=live,
    )


class TestFindActiveTournament:
    """Tests for picking the tournament to score."""

    def test_active_status_wins(self):
        """Test a tournament marked active beats live play and dates."""
        tournaments = [
            info('dated', 0, 10 * DAY_MS),
            info('live', 0, live=True),
            info('active', 20 * DAY_MS, status='active'),
        ]
        assert find_active_tournament(tournaments, now=DAY_MS).tournament_id == 'active'

    def test_live_play_before_dates(self):
        """Test live play beats the date window."""
        tournaments = [info('dated', 0, 10 * DAY_MS), info('live', 30 * DAY_MS, live=True)]
        assert find_active_tournament(tournaments, now=DAY_MS).tournament_id == 'live'

    def test_date_window(self):
        """Test a tournament whose dates contain now is picked."""
        tournaments = [info('past', 0, DAY_MS), info('current', 5 * DAY_MS, 9 * DAY_MS)]
        assert find_active_tournament(tournaments, now=6 * DAY_MS).tournament_id == 'current'

    def test_nothing_in_progress(self):
        """Test None is returned between tournaments."""
        tournaments = [info('past', 0, DAY_MS), info('open-ended', 2 * DAY_MS)]
        assert find_active_tournament(tournaments, now=5 * DAY_MS) is None
        assert find_active_tournament([], now=0) is None


class TestSelectCurrentSeason:
    """Tests for picking the season to roll up."""

    def test_matching_year(self):
        """Test the season for the requested year is returned."""
        seasons = [SeasonInfo('s25', 2025), SeasonInfo('s26', 2026)]
        assert select_current_season(seasons, 2026).season_id == 's26'

    def test_highest_number_wins(self):
        """Test several seasons in one year resolve to the latest."""
        seasons = [SeasonInfo('a', 2026, 1), SeasonInfo('b', 2026, 2)]
        assert select_current_season(seasons, 2026).season_id == 'b'

    def test_no_season(self):
        """Test a year without a season gives None."""
        assert select_current_season([SeasonInfo('s25', 2025)], 2026) is None
