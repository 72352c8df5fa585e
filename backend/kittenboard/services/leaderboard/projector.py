from dataclasses import dataclass
from typing import Iterable, Optional, Tuple


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    username: str
    wins: int

    def to_dict(self):
        return {'rank': self.rank, 'username': self.username, 'wins': self.wins}


@dataclass(frozen=True)
class LeaderboardSnapshot:
    entries: Tuple[LeaderboardEntry, ...] = ()

    def to_list(self):
        return [e.to_dict() for e in self.entries]

    def wins_for(self, username: str) -> Optional[int]:
        for e in self.entries:
            if e.username == username:
                return e.wins
        return None

    def __len__(self):
        return len(self.entries)


def ranking_key(record):
    return (-int(record.wins), record.username)


def project(records: Iterable, limit: Optional[int] = None) -> LeaderboardSnapshot:
    """Rank records by wins descending, ties broken by username ascending.

    Pure: the same records always give an equal snapshot.
    """
    ordered = sorted(records, key=ranking_key)
    if limit is not None:
        ordered = ordered[:limit]
    return LeaderboardSnapshot(entries=tuple(
        LeaderboardEntry(rank=i, username=r.username, wins=int(r.wins))
        for i, r in enumerate(ordered, start=1)
    ))
