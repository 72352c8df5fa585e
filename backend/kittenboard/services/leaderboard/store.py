import threading
from typing import List

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from kittenboard import db
from kittenboard.errors import NotFoundError, StoreUnavailableError, ValidationError
from kittenboard.models import Player, PlayerRecord

MAX_USERNAME_LENGTH = Player.__table__.c.username.type.length


def validate_identity(identity) -> str:
    if not isinstance(identity, str) or not identity.strip():
        raise ValidationError('username is required')
    if len(identity) > MAX_USERNAME_LENGTH:
        raise ValidationError(f'username must be at most {MAX_USERNAME_LENGTH} characters')
    return identity


def validate_size(n) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(n, bool) or not isinstance(n, int):
        raise ValidationError('limit must be an integer')
    if n <= 0:
        raise ValidationError('limit must be positive')
    return n


class PlayerStore:
    """Player win counts backed by the SQLAlchemy session.

    All operations run under one re-entrant lock, so callers can extend the
    critical section (increment, project, publish) by holding ``lock``.
    """

    def __init__(self):
        self.lock = threading.RLock()

    def _unavailable(self, action: str, exc: Exception) -> StoreUnavailableError:
        db.session.rollback()
        current_app.logger.error(f"[store-error] action={action} error={exc}")
        return StoreUnavailableError('Leaderboard store unavailable')

    def get_or_create(self, identity: str) -> PlayerRecord:
        validate_identity(identity)
        with self.lock:
            try:
                player = Player.query.filter_by(username=identity).first()
                if player:
                    return player.to_record()
                db.session.add(Player(username=identity, wins=0))
                try:
                    db.session.commit()
                except IntegrityError:
                    # Another writer created the row first
                    db.session.rollback()
                    player = Player.query.filter_by(username=identity).one()
                    return player.to_record()
            except SQLAlchemyError as exc:
                raise self._unavailable('get_or_create', exc) from exc
            current_app.logger.info(f"[player-create] username={identity}")
            return PlayerRecord(username=identity, wins=0)

    def increment_win(self, identity: str) -> PlayerRecord:
        validate_identity(identity)
        with self.lock:
            try:
                updated = (
                    Player.query.filter_by(username=identity)
                    .update({Player.wins: Player.wins + 1}, synchronize_session=False)
                )
                if not updated:
                    db.session.rollback()
                    raise NotFoundError('User not found')
                # Read inside the same transaction; nothing after the commit may fail the call
                wins = db.session.execute(
                    db.select(Player.wins).where(Player.username == identity)
                ).scalar_one()
                db.session.commit()
            except SQLAlchemyError as exc:
                raise self._unavailable('increment_win', exc) from exc
            return PlayerRecord(username=identity, wins=int(wins))

    def top_n(self, n: int) -> List[PlayerRecord]:
        validate_size(n)
        with self.lock:
            try:
                players = (
                    Player.query
                    .order_by(Player.wins.desc(), Player.username.asc())
                    .limit(n)
                    .all()
                )
            except SQLAlchemyError as exc:
                raise self._unavailable('top_n', exc) from exc
            return [p.to_record() for p in players]
