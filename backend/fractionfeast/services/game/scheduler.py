import threading
from typing import Callable, Iterable, Set

from fractionfeast import socketio
from fractionfeast.models import GameSession
from . import protocol
from .seats import start_next_round


_scheduled_rounds: Set[int] = set()
_scheduled_lock = threading.Lock()


def schedule_round_restart(app, session: GameSession, lock, deliver: Callable[[Iterable[protocol.Event]], None]) -> bool:
    """Schedule the next round after a win.

    - No-ops when ROUND_RESTART_DELAY_SEC is 0 (restart stays an explicit
      ``new_round`` request) and in TESTING unless ENABLE_SCHEDULER_IN_TESTS
    - Announces a countdown so clients can render it
    - Ensures a single timer per round number
    - Aborts if the round already moved on by the time the timer fires
    """
    delay = int(app.config.get('ROUND_RESTART_DELAY_SEC', 0))
    if delay <= 0:
        return False
    if app.config.get('TESTING') and not app.config.get('ENABLE_SCHEDULER_IN_TESTS'):
        return False

    round_number = session.round_number
    with _scheduled_lock:
        if round_number in _scheduled_rounds:
            app.logger.info(f"[timer-skip] round={round_number} already scheduled")
            return False
        _scheduled_rounds.add(round_number)

    app.logger.info(f"[timer-set] round={round_number} delay={delay}s")
    deliver([protocol.round_reset_countdown(delay)])

    def _worker(expected_round: int, wait: int):
        socketio.sleep(wait)
        with _scheduled_lock:
            _scheduled_rounds.discard(expected_round)
        with lock:
            if session.round_number != expected_round or session.winner_name is None:
                app.logger.info(
                    f"[timer-abort] expected_round={expected_round} actual_round={session.round_number}"
                )
                return
            app.logger.info(f"[timer-fire] round={expected_round} starting next round")
            deliver(start_next_round(session))

    socketio.start_background_task(_worker, round_number, delay)
    return True
