"""Constants and lookup tables for the golf league scoring engine."""

import re

# Tournament round marking a finished event
FINAL_ROUND = 5
ROUNDS = (1, 2, 3, 4)

# Finish statuses that make a player ineligible for the rest of the event
INACTIVE_STATUS_PATTERN = re.compile(r'CUT|WD|DQ', re.IGNORECASE)

CUT_LABEL = 'CUT'
TIE_PREFIX = 'T'

# Stage 0 is the regular season, 1-3 are the playoff legs
REGULAR_SEASON = 0
PLAYOFF_LEGS = (1, 2, 3)
FINAL_PLAYOFF_LEG = 3

# Players counted per round: stage -> (rounds 1-2, rounds 3-4)
SELECTION_COUNTS = {
    0: (10, 5),
    1: (10, 5),
    2: (5, 5),
    3: (3, 3),
}

# Selection counts at or above this average the whole roster
FULL_ROSTER_SELECTION = 10

# Golfers a team may roster
MAX_ROSTER_SIZE = 10

# Playoff bracket flags stored on a tour card
NO_BRACKET = 0
GOLD_BRACKET = 1
SILVER_BRACKET = 2

BRACKET_NAMES = {
    GOLD_BRACKET: 'gold',
    SILVER_BRACKET: 'silver',
}

# Defaults for the tunable league settings (see config.py)
DEFAULT_CUT_MIN_ACTIVE = 5
DEFAULT_GOLD_CUTOFF = 15
DEFAULT_SILVER_CUTOFF = 35
DEFAULT_GOLD_SEEDING_SLOTS = 30
DEFAULT_SILVER_SEEDING_SLOTS = 40
DEFAULT_SILVER_PAYOUT_OFFSET = 75
DEFAULT_PLAYOFF_TIER_KEYWORD = 'playoff'

# Holes in a completed round
HOLES_PER_ROUND = 18

# Which earliest tee time represents each round (1-based)
TEE_TIME_RANK = {1: 1, 2: 1, 3: 6, 4: 6}

# Run outcome reason codes
SKIP_NO_ACTIVE_TOURNAMENT = 'no_active_tournament'
SKIP_NO_TEAMS = 'no_teams'
SKIP_NO_CURRENT_SEASON = 'no_current_season'
SKIP_NO_TOUR_CARDS = 'no_tour_cards'
