"""Seat management: four seats always, placeholders in the gaps.

Real players are keyed by their connection id. Placeholders carry the
``dummy-<seat>`` id and an empty hand, and are rebuilt after every change
to the table so that real players stay packed at the front.
"""
from typing import List, Tuple

from fractionfeast.models import GameSession, Player, PLACEHOLDER_PREFIX, SEAT_COUNT
from . import protocol
from .deck import deal_initial_hand, initialize_round
from .errors import RoundInProgress, TableFull

WAITING_NAME = 'Waiting for player...'
AUTOMATED_NAME = 'AI Player'

MIN_REAL_PLAYERS = 2


def ensure_four_seats(session: GameSession) -> None:
    while len(session.seats) < SEAT_COUNT:
        seat = len(session.seats)
        name = WAITING_NAME if seat == 0 else AUTOMATED_NAME
        session.seats.append(Player(id=f"{PLACEHOLDER_PREFIX}{seat}", name=name))


def _drop_placeholders(session: GameSession) -> None:
    session.seats = [p for p in session.seats if not p.is_placeholder]


def reset_round(session: GameSession) -> None:
    """Full reset: new deck and target, every seat vacated and re-padded."""
    initialize_round(session)
    ensure_four_seats(session)


def admit_player(session: GameSession, connection_id: str) -> Tuple[Player, List[protocol.Event]]:
    """Seat a new real player after the existing ones.

    The private ``assigned_id`` is queued ahead of the snapshot that first
    shows the player at the table.
    Raises ``TableFull`` when four real players are already seated.
    """
    existing = session.find_player(connection_id)
    if existing is not None:
        return existing, [protocol.assigned_id(existing.id), protocol.state_snapshot(session)]
    if len(session.real_players) >= SEAT_COUNT:
        raise TableFull()

    player = Player(
        id=connection_id,
        name=f"Player {session.next_player_number}",
        hand=deal_initial_hand(session),
    )
    session.next_player_number += 1

    _drop_placeholders(session)
    session.seats.append(player)
    ensure_four_seats(session)
    return player, [protocol.assigned_id(player.id), protocol.state_snapshot(session)]


def remove_player(session: GameSession, connection_id: str) -> Tuple[bool, List[protocol.Event]]:
    """Vacate the seat held by ``connection_id``.

    Returns whether the table dropped below two real players and was reset.
    """
    session.seats = [p for p in session.seats if p.id != connection_id]
    _drop_placeholders(session)
    ensure_four_seats(session)

    if session.current_seat_index >= len(session.seats):
        session.current_seat_index = 0

    was_reset = len(session.real_players) < MIN_REAL_PLAYERS
    if was_reset:
        reset_round(session)
    return was_reset, [protocol.state_snapshot(session)]


def start_next_round(session: GameSession) -> List[protocol.Event]:
    """Begin a new round with the real players who are still seated.

    Unlike the population reset, seated players keep their seats, in order,
    and are dealt fresh hands from the new deck.
    Raises ``RoundInProgress`` unless the current round has been won.
    """
    if session.winner_name is None:
        raise RoundInProgress()
    seated = session.real_players
    initialize_round(session)
    for p in seated:
        p.hand = deal_initial_hand(session)
        session.seats.append(p)
    ensure_four_seats(session)
    return [protocol.notice('New round started!'), protocol.state_snapshot(session)]
