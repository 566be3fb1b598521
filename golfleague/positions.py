"""Finish positions with tie labels."""

import re
from collections.abc import Hashable, Iterable, Sequence

from .constants import CUT_LABEL, GOLD_BRACKET, REGULAR_SEASON, SILVER_BRACKET, TIE_PREFIX
from .models import TeamScore

_POSITION_PATTERN = re.compile(r'^\s*T?\s*(\d+)', re.IGNORECASE)


def parse_position(label: str | None) -> int | None:
    """
    Numeric rank from a finish label.

    'T3' -> 3, '12' -> 12; 'CUT', '', None and anything else unparsable -> None.
    """
    if not label:
        return None
    match = _POSITION_PATTERN.match(str(label))
    return int(match.group(1)) if match else None


def tie_labels(
    entries: Iterable[tuple[Hashable, float]], descending: bool = False
) -> dict[Hashable, str]:
    """
    Rank entries by value and label ties.

    Entries are sorted by value (ascending unless descending) with the id
    as a secondary key, so the walk order never depends on input order.
    A run of equal values is one tie group; its rank is the number of
    strictly better entries plus one, prefixed with 'T' when shared.

    Args:
        entries: (id, value) pairs
        descending: Rank higher values first (standings points)

    Returns:
        Dict mapping id to label ('1', 'T2', 'T2', '4', ...)
    """
    ordered = sorted(entries, key=lambda e: (-e[1] if descending else e[1], str(e[0])))
    labels: dict[Hashable, str] = {}

    i = 0
    while i < len(ordered):
        value = ordered[i][1]
        j = i + 1
        while j < len(ordered) and ordered[j][1] == value:
            j += 1
        label = f'{TIE_PREFIX if j - i > 1 else ""}{i + 1}'
        for k in range(i, j):
            labels[ordered[k][0]] = label
        i = j

    return labels


def _rank_scored(scores: Iterable[TeamScore]) -> dict[Hashable, str]:
    return tie_labels((s.team_id, s.score) for s in scores if s.score is not None)


def assign_positions(scores: Sequence[TeamScore], stage: int) -> dict[str, str]:
    """
    Finish labels for every ranked team.

    Regular season: all teams with a score are ranked together; cut teams
    are labelled CUT. Playoff legs: gold and silver brackets are ranked
    independently and teams outside both get no label.

    Returns:
        Dict mapping team id to label; unranked teams are absent
    """
    if stage == REGULAR_SEASON:
        labels = _rank_scored(s for s in scores if not s.is_cut)
        for s in scores:
            if s.is_cut:
                labels[s.team_id] = CUT_LABEL
        return labels

    labels = {}
    for bracket in (GOLD_BRACKET, SILVER_BRACKET):
        labels.update(_rank_scored(s for s in scores if s.bracket == bracket))
    return labels


def next_past_position(
    previous: str | None, previous_past: str | None, current: str | None
) -> str | None:
    """The label a team held before its latest change."""
    if previous is not None and previous != current:
        return previous
    return previous_past
