from flask import Blueprint, jsonify, request, current_app
from kittenboard.errors import LeaderboardError, StoreUnavailableError, ValidationError
from kittenboard.services.leaderboard import get_leaderboard


api = Blueprint('api', __name__)


@api.errorhandler(LeaderboardError)
def handle_leaderboard_error(exc):
    if isinstance(exc, StoreUnavailableError):
        current_app.logger.error(f"[api-error] path={request.path} error={exc.message}")
    return jsonify(exc.to_dict()), exc.status_code


@api.route('/start-game', methods=['POST'])
def start_game():
    data = request.get_json(silent=True) or {}
    record = get_leaderboard().start_session(data.get('username'))
    return jsonify({'message': 'Game started', 'user': record.to_dict()})


@api.route('/win', methods=['POST'])
def win_game():
    data = request.get_json(silent=True) or {}
    record = get_leaderboard().record_win(data.get('username'))
    return jsonify({'message': 'Game won', 'user': record.to_dict()})


@api.route('/leaderboard', methods=['GET'])
def get_leaderboard_snapshot():
    raw_limit = request.args.get('limit')
    limit = None
    if raw_limit is not None:
        try:
            limit = int(raw_limit)
        except ValueError:
            raise ValidationError('limit must be an integer')
    snapshot = get_leaderboard().leaderboard(limit)
    return jsonify(snapshot.to_list())
