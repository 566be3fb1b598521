"""Data models for the golf league scoring engine."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, ClassVar, Union

from .constants import (
    FINAL_ROUND,
    GOLD_BRACKET,
    INACTIVE_STATUS_PATTERN,
    NO_BRACKET,
    SILVER_BRACKET,
)

ROUND_FIELDS = ('round_one', 'round_two', 'round_three', 'round_four')
TEE_TIME_FIELDS = tuple(f'{name}_tee_time' for name in ROUND_FIELDS)


@dataclass(frozen=True)
class PlayerRoundSnapshot:
    """One golfer's live and per-round state for a tournament."""
    player_id: int
    position: str | None = None  # Leaderboard label, or CUT / WD / DQ
    score: float | None = None  # Cumulative score to par
    today: float | None = None
    thru: float | None = None
    rounds: tuple[float | None, ...] = (None, None, None, None)  # Raw strokes
    tee_times: tuple[str | None, ...] = (None, None, None, None)

    @property
    def is_active(self) -> bool:
        """False once the golfer has been cut, withdrawn or disqualified."""
        return not (self.position and INACTIVE_STATUS_PATTERN.search(self.position))

    def strokes(self, round_num: int) -> float | None:
        return self.rounds[round_num - 1]

    def tee_time(self, round_num: int) -> str | None:
        return self.tee_times[round_num - 1]


@dataclass(frozen=True)
class Team:
    """A participant's roster for one tournament."""
    team_id: str
    participant_id: str
    player_ids: tuple[int, ...]
    position: str | None = None  # Label from the previous run
    past_position: str | None = None


@dataclass(frozen=True)
class Participant:
    """A season participant (tour card) with the standings fields the engine reads."""
    participant_id: str
    tour_id: str
    points: float = 0.0
    playoff: int = NO_BRACKET

    @property
    def bracket(self) -> int:
        """Playoff bracket flag, NO_BRACKET when not qualified."""
        return self.playoff if self.playoff in (GOLD_BRACKET, SILVER_BRACKET) else NO_BRACKET

    @property
    def penalty_bracket(self) -> int:
        """Bracket used to find fallback scores; non-playoff teams share silver."""
        return GOLD_BRACKET if self.playoff == GOLD_BRACKET else SILVER_BRACKET


@dataclass(frozen=True)
class TierTable:
    """Points and payouts by finish rank (index 0 = 1st place)."""
    name: str
    points: tuple[float, ...] = ()
    payouts: tuple[float, ...] = ()


@dataclass(frozen=True)
class TournamentInfo:
    """Schedule-level facts about a tournament, used to order playoff legs."""
    tournament_id: str
    season_id: str
    start_date: float
    end_date: float | None = None
    tier_name: str = ''
    status: str | None = None
    live_play: bool = False


@dataclass(frozen=True)
class TournamentContext:
    """Tournament-level state for one computation run."""
    tournament_id: str
    season_id: str
    current_round: int
    live_play: bool
    par: int
    tier: TierTable
    start_date: float = 0.0

    @property
    def round_state(self) -> int:
        """Current round clamped to 1-5."""
        return min(FINAL_ROUND, max(1, int(self.current_round)))


@dataclass(frozen=True)
class TournamentSnapshot:
    """Everything one run needs, captured at a single point in time."""
    context: TournamentContext
    teams: tuple[Team, ...]
    participants: tuple[Participant, ...]
    players: tuple[PlayerRoundSnapshot, ...]
    season_tournaments: tuple[TournamentInfo, ...] = ()
    # Final scores from the preceding playoff leg, by participant id
    prior_scores: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))


@dataclass(frozen=True)
class RoundContribution:
    """A team's stroke-relative result for one round."""
    today: float | None
    thru: float | None
    over_par: float | None


# Score lines: one variant per output shape, so a field is either part of the
# shape or absent from it.


@dataclass(frozen=True)
class CutLine:
    """Team eliminated at the cut: only the first two rounds are kept."""
    shape: ClassVar[str] = 'cut'
    round_one: float | None
    round_two: float | None

    @property
    def score(self) -> None:
        return None

    def fields(self) -> dict[str, Any]:
        return {'round_one': self.round_one, 'round_two': self.round_two}


@dataclass(frozen=True)
class OpeningRoundLine:
    """Round 1 in progress. Nothing is set until live play begins."""
    shape: ClassVar[str] = 'round_1'
    today: float | None = None
    thru: float | None = None
    score: float | None = None

    def fields(self) -> dict[str, Any]:
        return {'today': self.today, 'thru': self.thru, 'score': self.score}


@dataclass(frozen=True)
class InProgressLine:
    """Rounds 2-4: every earlier round is posted, the current one is live or just finished."""
    posted_rounds: tuple[float | None, ...]
    today: float | None
    thru: float | None
    score: float | None

    @property
    def shape(self) -> str:
        return f'round_{len(self.posted_rounds) + 1}'

    def fields(self) -> dict[str, Any]:
        result: dict[str, Any] = dict(zip(ROUND_FIELDS, self.posted_rounds))
        result.update(today=self.today, thru=self.thru, score=self.score)
        return result


@dataclass(frozen=True)
class FinalLine:
    """Tournament complete: all four rounds posted."""
    shape: ClassVar[str] = 'final'
    posted_rounds: tuple[float | None, float | None, float | None, float | None]
    today: float | None
    thru: float
    score: float | None

    def fields(self) -> dict[str, Any]:
        result: dict[str, Any] = dict(zip(ROUND_FIELDS, self.posted_rounds))
        result.update(today=self.today, thru=self.thru, score=self.score)
        return result


ScoreLine = Union[CutLine, OpeningRoundLine, InProgressLine, FinalLine]


@dataclass(frozen=True)
class TeamScore:
    """Aggregated score for one team before ranking."""
    team_id: str
    participant_id: str
    bracket: int
    round: int
    line: ScoreLine
    tee_times: tuple[str | None, ...] = (None, None, None, None)

    @property
    def is_cut(self) -> bool:
        return isinstance(self.line, CutLine)

    @property
    def score(self) -> float | None:
        return self.line.score


@dataclass(frozen=True)
class Award:
    """Points and earnings for one team; None means the field is left unset."""
    points: int | None = None
    earnings: int | None = None


@dataclass(frozen=True)
class TeamUpdate:
    """Output record for one team, handed to the persistence sink."""
    team_id: str
    round: int
    line: ScoreLine
    position: str | None = None
    past_position: str | None = None
    points: int | None = None
    earnings: int | None = None
    tee_times: tuple[str | None, ...] = (None, None, None, None)

    @property
    def score(self) -> float | None:
        return self.line.score

    def to_record(self) -> dict[str, Any]:
        """Flatten to the persistence shape. Fields outside the line's shape are None."""
        record: dict[str, Any] = {'team_id': self.team_id, 'round': self.round}
        for name in ROUND_FIELDS:
            record[name] = None
        record.update(today=None, thru=None, score=None)
        record.update(self.line.fields())
        record.update(
            position=self.position,
            past_position=self.past_position,
            points=self.points,
            earnings=self.earnings,
        )
        record.update(zip(TEE_TIME_FIELDS, self.tee_times))
        return record


@dataclass(frozen=True)
class TeamResult:
    """A team's persisted outcome for a tournament, as read by the standings rollup."""
    participant_id: str
    round: int | None = None
    position: str | None = None
    points: float | None = None
    earnings: float | None = None


@dataclass(frozen=True)
class ParticipantStanding:
    """Season-long rollup for one participant."""
    participant_id: str
    tour_id: str
    points: int
    earnings: float
    wins: int
    top_ten: int
    made_cut: int
    appearances: int
    current_position: str
    playoff: int

    def to_record(self) -> dict[str, Any]:
        return {
            'participant_id': self.participant_id,
            'points': self.points,
            'earnings': self.earnings,
            'wins': self.wins,
            'top_ten': self.top_ten,
            'made_cut': self.made_cut,
            'appearances': self.appearances,
            'current_position': self.current_position,
            'playoff': self.playoff,
        }


@dataclass(frozen=True)
class SeasonInfo:
    season_id: str
    year: int
    number: int = 1


@dataclass(frozen=True)
class RunOutcome:
    """Result of one engine run: either skipped with a reason, or a full list of records."""
    skipped: bool
    reason: str | None = None
    target_id: str | None = None
    records: tuple[Any, ...] = ()
    warnings: tuple[str, ...] = ()

    @classmethod
    def skip(cls, reason: str, target_id: str | None = None) -> 'RunOutcome':
        return cls(skipped=True, reason=reason, target_id=target_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            'ok': True,
            'skipped': self.skipped,
            'reason': self.reason,
            'target_id': self.target_id,
            'records': [r.to_record() for r in self.records],
            'warnings': list(self.warnings),
        }
