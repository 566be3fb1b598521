"""Pydantic schemas for league data files and configuration."""

import math

from pydantic import BaseModel, Field, field_validator

from .constants import (
    DEFAULT_CUT_MIN_ACTIVE,
    DEFAULT_GOLD_CUTOFF,
    DEFAULT_GOLD_SEEDING_SLOTS,
    DEFAULT_PLAYOFF_TIER_KEYWORD,
    DEFAULT_SILVER_CUTOFF,
    DEFAULT_SILVER_PAYOUT_OFFSET,
    DEFAULT_SILVER_SEEDING_SLOTS,
)


def _optional_number(value):
    """Coerce feed values to float, treating blanks and garbage as missing."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def _optional_int(value):
    """Whole-number feed values as int; anything else is treated as missing."""
    number = _optional_number(value)
    if number is None or not number.is_integer():
        return None
    return int(number)


def _optional_text(value):
    if value is None:
        return None
    text = str(value).strip()
    return text or None


class Season(BaseModel):
    """League season."""

    id: str
    year: int
    number: int = 1

    class Config:
        extra = 'ignore'


class Course(BaseModel):
    """Golf course the tournament is played on."""

    id: str
    name: str | None = None
    par: int | None = None

    @field_validator('par', mode='before')
    @classmethod
    def coerce_par(cls, v):
        """A missing or non-positive par is left unset; scoring that course aborts."""
        par = _optional_int(v)
        return par if par is not None and par > 0 else None

    class Config:
        extra = 'ignore'


class Tier(BaseModel):
    """Tournament tier with its points and payouts tables."""

    id: str
    name: str = ''
    points: list[float] = Field(default_factory=list)
    payouts: list[float] = Field(default_factory=list)

    class Config:
        extra = 'ignore'


class Tournament(BaseModel):
    """Tournament on the season schedule."""

    id: str
    name: str | None = None
    season_id: str
    course_id: str
    tier_id: str
    start_date: float  # Epoch milliseconds
    end_date: float | None = None
    current_round: int | None = None  # Clamped to 1-5 when scored
    live_play: bool = False
    status: str | None = None

    @field_validator('current_round', mode='before')
    @classmethod
    def coerce_round(cls, v):
        return _optional_int(v)

    @field_validator('status', mode='before')
    @classmethod
    def coerce_status(cls, v):
        status = _optional_text(v)
        return status.lower() if status else None

    class Config:
        extra = 'ignore'


class TourCard(BaseModel):
    """A member's participation in a tour for one season."""

    id: str
    tour_id: str
    season_id: str
    display_name: str | None = None
    points: float = 0.0
    earnings: float = 0.0
    playoff: int = 0

    @field_validator('playoff', mode='before')
    @classmethod
    def coerce_playoff(cls, v):
        """Unknown bracket flags mean not qualified."""
        flag = _optional_int(v)
        return flag if flag in (0, 1, 2) else 0

    class Config:
        extra = 'ignore'


class Team(BaseModel):
    """Fantasy team for one tournament, with whatever results are already stored."""

    id: str
    tournament_id: str
    tour_card_id: str
    golfer_ids: list[int] = Field(default_factory=list)
    round: int | None = None
    score: float | None = None
    position: str | None = None
    past_position: str | None = None
    points: float | None = None
    earnings: float | None = None

    @field_validator('score', 'points', 'earnings', mode='before')
    @classmethod
    def coerce_numbers(cls, v):
        """Malformed stored numbers are treated as absent."""
        return _optional_number(v)

    @field_validator('round', mode='before')
    @classmethod
    def coerce_round(cls, v):
        return _optional_int(v)

    @field_validator('position', 'past_position', mode='before')
    @classmethod
    def coerce_labels(cls, v):
        return _optional_text(v)

    class Config:
        extra = 'ignore'


class TournamentGolfer(BaseModel):
    """A golfer's live feed entry for one tournament."""

    tournament_id: str
    golfer_id: int
    position: str | None = None
    score: float | None = None
    today: float | None = None
    thru: float | None = None
    round_one: float | None = None
    round_two: float | None = None
    round_three: float | None = None
    round_four: float | None = None
    round_one_tee_time: str | None = None
    round_two_tee_time: str | None = None
    round_three_tee_time: str | None = None
    round_four_tee_time: str | None = None

    @field_validator(
        'score', 'today', 'thru', 'round_one', 'round_two', 'round_three', 'round_four',
        mode='before',
    )
    @classmethod
    def coerce_numbers(cls, v):
        """Feed values like '' or '-' are treated as absent."""
        return _optional_number(v)

    @field_validator(
        'position',
        'round_one_tee_time',
        'round_two_tee_time',
        'round_three_tee_time',
        'round_four_tee_time',
        mode='before',
    )
    @classmethod
    def coerce_text(cls, v):
        return _optional_text(v)

    class Config:
        extra = 'ignore'


class LeagueDataFile(BaseModel):
    """Complete league data export consumed by the CLI."""

    seasons: list[Season] = Field(default_factory=list)
    courses: list[Course] = Field(default_factory=list)
    tiers: list[Tier] = Field(default_factory=list)
    tournaments: list[Tournament] = Field(default_factory=list)
    tour_cards: list[TourCard] = Field(default_factory=list)
    teams: list[Team] = Field(default_factory=list)
    tournament_golfers: list[TournamentGolfer] = Field(default_factory=list)

    class Config:
        extra = 'forbid'


class LeagueConfig(BaseModel):
    """League configuration settings."""

    cut_min_active: int = Field(default=DEFAULT_CUT_MIN_ACTIVE, ge=1, le=10)
    gold_cutoff: int = Field(default=DEFAULT_GOLD_CUTOFF, ge=0)
    silver_cutoff: int = Field(default=DEFAULT_SILVER_CUTOFF, ge=0)
    gold_seeding_slots: int = Field(default=DEFAULT_GOLD_SEEDING_SLOTS, ge=0)
    silver_seeding_slots: int = Field(default=DEFAULT_SILVER_SEEDING_SLOTS, ge=0)
    silver_payout_offset: int = Field(default=DEFAULT_SILVER_PAYOUT_OFFSET, ge=0)
    playoff_tier_keyword: str = Field(default=DEFAULT_PLAYOFF_TIER_KEYWORD, min_length=1)

    @field_validator('silver_cutoff')
    @classmethod
    def validate_cutoffs(cls, v, info):
        """Silver qualification must extend past gold."""
        gold = info.data.get('gold_cutoff')
        if gold is not None and v < gold:
            raise ValueError(f'silver_cutoff ({v}) must be >= gold_cutoff ({gold})')
        return v

    class Config:
        extra = 'forbid'
