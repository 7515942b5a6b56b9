from flask import Blueprint, jsonify, current_app
from werkzeug.exceptions import HTTPException

from fractionfeast.services.game.errors import GameError
from fractionfeast.services.game.seats import start_next_round
from fractionfeast.socketio_events import deliver

main = Blueprint('main', __name__)


@main.app_errorhandler(HTTPException)
def handle_http_error(exc):
    return jsonify({'error': exc.description}), exc.code


@main.route('/health', methods=['GET'])
def health():
    return jsonify({'status': 'ok'})


@main.route('/api/game/state', methods=['GET'])
def get_game_state():
    """
    Returns the current table snapshot. Deck contents are never exposed.
    """
    with current_app.extensions['game_lock']:
        snapshot = current_app.extensions['game_session'].snapshot()
    return jsonify(snapshot)


@main.route('/api/game/new-round', methods=['POST'])
def new_round():
    """
    Starts the next round for the players currently seated and broadcasts it.
    Only allowed once the current round has been won.
    """
    session = current_app.extensions['game_session']
    with current_app.extensions['game_lock']:
        previous_round = session.round_number
        try:
            events = start_next_round(session)
        except GameError as exc:
            current_app.logger.info(f"[new-round-rejected] source=http reason={exc.code}")
            return jsonify({'error': exc.message, 'code': exc.code}), 409
        deliver(events)
        current_app.logger.info(f"[new-round] source=http previous_round={previous_round} round={session.round_number}")
        return jsonify(session.snapshot()), 201
