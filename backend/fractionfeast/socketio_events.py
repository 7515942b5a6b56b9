from typing import Iterable, Optional

from flask import current_app, request
from flask_socketio import emit

from fractionfeast import socketio
from fractionfeast.models import GameSession
from fractionfeast.services.game import protocol
from fractionfeast.services.game.errors import GameError
from fractionfeast.services.game.scheduler import schedule_round_restart
from fractionfeast.services.game.seats import admit_player, remove_player, start_next_round
from fractionfeast.services.game.turns import resolve_play

NAMESPACE = '/ws'


def get_session() -> GameSession:
    return current_app.extensions['game_session']


def get_table_lock():
    # One event at a time touches the session, broadcasts included
    return current_app.extensions['game_lock']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def deliver(events: Iterable[protocol.Event], sid: Optional[str] = None) -> None:
    """Send events in order: private ones to ``sid``, the rest to everyone."""
    for event in events:
        if event.private:
            if sid is None:
                continue
            socketio.emit(event.name, event.payload, to=sid, namespace=NAMESPACE)
        else:
            socketio.emit(event.name, event.payload, namespace=NAMESPACE)


def _reject(exc: GameError, sid: str) -> None:
    deliver([protocol.action_error(exc.code, exc.message)], sid)


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})
    # Late observers get the table straight away
    with get_table_lock():
        snapshot = get_session().snapshot()
    emit(protocol.STATE_SNAPSHOT, snapshot)


def handle_join(data=None):
    sid = _get_sid()
    with get_table_lock():
        session = get_session()
        try:
            player, events = admit_player(session, sid)
        except GameError as exc:
            current_app.logger.info(f"[join-rejected] sid={sid} reason={exc.code}")
            _reject(exc, sid)
            return
        current_app.logger.info(
            f"[join] sid={sid} name={player.name} real_players={len(session.real_players)}"
        )
        deliver(events, sid)


def handle_play_card(data):
    sid = _get_sid()
    data = data if isinstance(data, dict) else {}
    acting_player_id = data.get('acting_player_id')
    card_index = data.get('card_index')
    with get_table_lock():
        session = get_session()
        acting_name = session.current_player.name
        try:
            outcome, events = resolve_play(session, acting_player_id, card_index)
        except GameError as exc:
            current_app.logger.info(f"[play-rejected] sid={sid} reason={exc.code} card_index={card_index!r}")
            _reject(exc, sid)
            return
        current_app.logger.info(
            f"[play] sid={sid} player={acting_name} outcome={outcome} "
            f"plate={session.plate_fraction.text} target={session.target_fraction.text} "
            f"next_seat={session.current_seat_index} deck={len(session.deck)}"
        )
        deliver(events, sid)
        if session.winner_name is not None:
            schedule_round_restart(current_app._get_current_object(), session, get_table_lock(), deliver)


def handle_new_round(data=None):
    sid = _get_sid()
    with get_table_lock():
        session = get_session()
        previous_round = session.round_number
        try:
            events = start_next_round(session)
        except GameError as exc:
            current_app.logger.info(f"[new-round-rejected] sid={sid} reason={exc.code}")
            _reject(exc, sid)
            return
        current_app.logger.info(f"[new-round] requested_by={sid} previous_round={previous_round}")
        deliver(events, sid)


def handle_disconnect(reason=None):
    sid = _get_sid()
    with get_table_lock():
        session = get_session()
        player = session.find_player(sid)
        if player is None:
            return
        was_reset, events = remove_player(session, sid)
        current_app.logger.info(f"[leave] sid={sid} name={player.name} reset={was_reset}")
        if was_reset:
            current_app.logger.info(f"[round-reset] reason=population round={session.round_number}")
        deliver(events)


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on namespace '/ws'."""
    socketio.on_event('connect', handle_connect, namespace=NAMESPACE)
    socketio.on_event('disconnect', handle_disconnect, namespace=NAMESPACE)
    socketio.on_event('join', handle_join, namespace=NAMESPACE)
    socketio.on_event('play_card', handle_play_card, namespace=NAMESPACE)
    socketio.on_event('new_round', handle_new_round, namespace=NAMESPACE)
