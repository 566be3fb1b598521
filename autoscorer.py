#!/usr/bin/env python3
"""
Fantasy golf autoscorer.

Recomputes team scores for the active tournament or season standings
from a league data export.

Usage:
    python autoscorer.py teams --data data/league.json
    python autoscorer.py teams --data data/league.json --tournament-id t_123
    python autoscorer.py standings --data data/league.json --year 2026
"""

import sys

from golfleague.cli import main

if __name__ == "__main__":
    sys.exit(main())
