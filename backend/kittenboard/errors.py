"""Error taxonomy for the leaderboard core.

Each error carries the HTTP status the API layer answers with, so routes
and socket handlers never need to map exceptions by hand.
"""


class LeaderboardError(Exception):
    status_code = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {'error': self.message}


class ValidationError(LeaderboardError):
    """Malformed identity or leaderboard size supplied by the caller."""
    status_code = 400


class NotFoundError(LeaderboardError):
    """A win was reported for a player that never started a session."""
    status_code = 404


class StoreUnavailableError(LeaderboardError):
    """The backing store could not be read or the write was not committed."""
    status_code = 503
