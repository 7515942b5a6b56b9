"""Outbound message contract.

Game services never talk to the transport. They return ordered lists of
``Event`` values; the socket layer delivers them, either privately to the
requester or broadcast to every connected client.
"""
from dataclasses import dataclass
from typing import Any

from fractionfeast.models import GameSession

ASSIGNED_ID = 'assigned_id'
STATE_SNAPSHOT = 'state_snapshot'
NOTICE = 'notice'
ACTION_ERROR = 'action_error'
ROUND_OVER = 'round_over'
ROUND_RESET_COUNTDOWN = 'round_reset_countdown'


@dataclass(frozen=True)
class Event:
    name: str
    payload: Any
    private: bool = False


def assigned_id(player_id: str) -> Event:
    return Event(ASSIGNED_ID, {'id': player_id}, private=True)


def state_snapshot(session: GameSession) -> Event:
    return Event(STATE_SNAPSHOT, session.snapshot())


def notice(text: str) -> Event:
    return Event(NOTICE, {'text': text})


def action_error(code: str, text: str) -> Event:
    return Event(ACTION_ERROR, {'code': code, 'text': text}, private=True)


def round_over(winner_name: str) -> Event:
    return Event(ROUND_OVER, {'winner_name': winner_name})


def round_reset_countdown(seconds_left: int) -> Event:
    return Event(ROUND_RESET_COUNTDOWN, {'seconds_left': seconds_left})
