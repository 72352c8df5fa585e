from dataclasses import dataclass
from datetime import datetime, timezone

from kittenboard import db


@dataclass(frozen=True)
class PlayerRecord:
    """Detached view of a player row, safe to hand across threads."""
    username: str
    wins: int

    def to_dict(self):
        return {
            'username': self.username,
            'wins': self.wins,
        }


def _utcnow():
    return datetime.now(timezone.utc)


class Player(db.Model):
    __tablename__ = 'player'
    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(64), unique=True, nullable=False, index=True)
    wins = db.Column(db.Integer, nullable=False, default=0, server_default='0')
    created_at = db.Column(db.DateTime, nullable=False, default=_utcnow)

    def to_record(self):
        return PlayerRecord(username=self.username, wins=int(self.wins or 0))
