from kittenboard import create_app, socketio
from kittenboard.services.leaderboard import get_leaderboard

app = create_app()

if __name__ == '__main__':
    # Use SocketIO server to enable websockets in dev
    try:
        socketio.run(app, debug=True)
    finally:
        get_leaderboard(app).close()
