"""Sanity checks for computed team updates."""

from collections import Counter, defaultdict
from collections.abc import Iterable, Mapping, Sequence

from .constants import BRACKET_NAMES, FINAL_ROUND, REGULAR_SEASON
from .models import ROUND_FIELDS, TeamUpdate
from .positions import parse_position


def validate_round_fields(update: TeamUpdate, round_state: int) -> list[str]:
    """
    Check that no round past the current one is populated.

    At the final round all four rounds must be present (unless the team
    was cut).
    """
    warnings = []
    record = update.to_record()

    last_allowed = 4 if round_state >= FINAL_ROUND else round_state - 1
    for round_num, name in enumerate(ROUND_FIELDS, start=1):
        if round_num > last_allowed and record[name] is not None:
            warnings.append(
                f'Team {update.team_id} has {name} set during round {round_state}'
            )

    if round_state >= FINAL_ROUND and update.line.shape == 'final':
        missing = [name for name in ROUND_FIELDS if record[name] is None]
        if missing:
            warnings.append(f'Team {update.team_id} is final but missing {", ".join(missing)}')

    return warnings


def validate_rank_sequence(labels: Iterable[str | None], group: str = 'field') -> list[str]:
    """
    Check that ranks start at 1 and each tie group is followed by the next free rank.

    For example 1, T2, T2, 4 is valid; 1, 3 or T1, T1, 2 is not.
    """
    counts = Counter(r for r in (parse_position(label) for label in labels) if r is not None)
    if not counts:
        return []

    warnings = []
    expected = 1
    for rank in sorted(counts):
        if rank != expected:
            warnings.append(f'{group} rank sequence jumps to {rank} (expected {expected})')
            break
        expected = rank + counts[rank]
    return warnings


def validate_tied_awards(updates: Sequence[TeamUpdate]) -> list[str]:
    """Check that every team sharing a label was awarded the same points and earnings."""
    warnings = []
    by_label: dict[str, set[tuple]] = defaultdict(set)
    for update in updates:
        if parse_position(update.position) is None:
            continue
        by_label[update.position].add((update.points, update.earnings))

    for label, awards in sorted(by_label.items()):
        if label.startswith('T') and len(awards) > 1:
            warnings.append(f'Tied group {label} has unequal awards: {sorted(awards, key=str)}')
    return warnings


def validate_updates(
    updates: Sequence[TeamUpdate],
    stage: int,
    round_state: int,
    brackets: Mapping[str, int],
) -> list[str]:
    """
    Validate all team updates of a run.

    Args:
        updates: Team updates from one run
        stage: 0 for regular season, 1-3 for playoff legs
        round_state: Tournament round 1-5
        brackets: Playoff bracket flag by team id

    Returns:
        List of warning messages (empty if no issues)
    """
    warnings: list[str] = []

    seen = Counter(u.team_id for u in updates)
    for team_id, count in sorted(seen.items()):
        if count > 1:
            warnings.append(f'Team {team_id} has {count} updates in one run')

    for update in updates:
        warnings.extend(validate_round_fields(update, round_state))

    if stage == REGULAR_SEASON:
        warnings.extend(validate_rank_sequence(u.position for u in updates))
        warnings.extend(validate_tied_awards(updates))
    else:
        for bracket, name in BRACKET_NAMES.items():
            group = [u for u in updates if brackets.get(u.team_id) == bracket]
            warnings.extend(validate_rank_sequence((u.position for u in group), name))
            warnings.extend(validate_tied_awards(group))

    return warnings
