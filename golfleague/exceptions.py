"""Exceptions raised by the golf league scoring engine."""


class SnapshotError(ValueError):
    """A snapshot is missing data the run cannot do without (tournament, course or tier)."""

    def __init__(self, message: str, tournament_id: str | None = None):
        super().__init__(message)
        self.tournament_id = tournament_id
