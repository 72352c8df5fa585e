import os


def _env_flag(name, default='0'):
    return os.environ.get(name, default).strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///kittenboard.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Origins allowed for both HTTP (CORS) and Socket.IO, comma separated
    CORS_ORIGINS = [o.strip() for o in os.environ.get(
        'CORS_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000'
    ).split(',') if o.strip()]
    LOG_LEVEL = os.environ.get('LOG_LEVEL', 'INFO')
    # Default and maximum size of the top-N leaderboard
    LEADERBOARD_SIZE = int(os.environ.get('LEADERBOARD_SIZE', '10'))
    LEADERBOARD_MAX_SIZE = int(os.environ.get('LEADERBOARD_MAX_SIZE', '100'))
    # Socket.IO namespace observers connect to
    LEADERBOARD_NAMESPACE = os.environ.get('LEADERBOARD_NAMESPACE', '/ws')
    # Optional: push a fresh snapshot when a new player starts a session
    BROADCAST_ON_SESSION_START = _env_flag('BROADCAST_ON_SESSION_START')
