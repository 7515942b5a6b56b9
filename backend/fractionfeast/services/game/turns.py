"""Turn engine: validate a play, decide win / bust / normal, advance the turn.

``play_card`` mutates the session and returns the ordered events to deliver.
Every check runs before the first mutation, so a rejected request leaves the
table exactly as it was.
"""
from typing import List, Tuple

from fractionfeast.models import GameSession, Player, SEAT_COUNT
from . import protocol
from .arithmetic import Fraction, add, exceeds, within
from .errors import InvalidCardIndex, NotYourTurn, RoundOver

# Plate within 1/20 (0.05) of the target, either side, wins
TOLERANCE = Fraction(1, 20)

WIN = 'win'
BUST = 'bust'
NORMAL = 'normal'


def has_valid_move(session: GameSession, player: Player) -> bool:
    """Whether any card in hand can go on the plate without busting."""
    return any(
        not exceeds(add(session.plate_fraction, card.fraction), session.target_fraction, TOLERANCE)
        for card in player.hand
    )


def classify(session: GameSession, card) -> str:
    candidate = add(session.plate_fraction, card.fraction)
    if within(candidate, session.target_fraction, TOLERANCE):
        return WIN
    if exceeds(candidate, session.target_fraction, TOLERANCE):
        return BUST
    return NORMAL


def advance_turn(session: GameSession) -> None:
    session.current_seat_index = (session.current_seat_index + 1) % SEAT_COUNT
    if session.skip_placeholder_turns and session.real_players:
        while session.current_player.is_placeholder:
            session.current_seat_index = (session.current_seat_index + 1) % SEAT_COUNT


def _validate(session: GameSession, acting_player_id, card_index) -> Player:
    if session.winner_name is not None:
        raise RoundOver()
    player = session.current_player
    if player.is_placeholder or player.id != acting_player_id:
        raise NotYourTurn()
    if isinstance(card_index, bool) or not isinstance(card_index, int):
        raise InvalidCardIndex()
    if not 0 <= card_index < len(player.hand):
        raise InvalidCardIndex()
    return player


def resolve_play(session: GameSession, acting_player_id, card_index) -> Tuple[str, List[protocol.Event]]:
    """Apply a play and report which outcome it had alongside its events."""
    player = _validate(session, acting_player_id, card_index)
    card = player.hand[card_index]
    outcome = classify(session, card)

    if outcome == WIN:
        return outcome, _win(session, player, card_index)
    if outcome == BUST:
        return outcome, _bust(session, player, card_index)
    return outcome, _normal(session, player, card_index)


def play_card(session: GameSession, acting_player_id, card_index) -> List[protocol.Event]:
    return resolve_play(session, acting_player_id, card_index)[1]


def _win(session: GameSession, player: Player, card_index: int) -> List[protocol.Event]:
    session.plate_fraction = session.target_fraction
    del player.hand[card_index]
    session.winner_name = player.name
    return [
        protocol.state_snapshot(session),
        protocol.notice(f"{player.name} wins! Close enough to the target: {session.target_fraction.text}"),
        protocol.round_over(player.name),
    ]


def _bust(session: GameSession, player: Player, card_index: int) -> List[protocol.Event]:
    card = player.hand.pop(card_index)
    events = [protocol.notice(
        f"Bust! {player.name} went over the target and discarded {card.fraction.text}."
    )]

    if not has_valid_move(session, player):
        events.append(protocol.notice(f"{player.name} has no valid moves and must discard and draw."))
        if player.hand:
            del player.hand[0]
        drawn = session.draw()
        if drawn is not None:
            player.hand.append(drawn)

    # Replacement for the busted card itself
    drawn = session.draw()
    if drawn is not None:
        player.hand.append(drawn)

    advance_turn(session)
    events.append(protocol.state_snapshot(session))
    return events


def _normal(session: GameSession, player: Player, card_index: int) -> List[protocol.Event]:
    card = player.hand.pop(card_index)
    session.plate_fraction = add(session.plate_fraction, card.fraction)

    events = []
    drawn = session.draw()
    if drawn is not None:
        player.hand.append(drawn)
    else:
        events.append(protocol.notice('Deck is empty! No more cards can be drawn.'))

    advance_turn(session)
    events.append(protocol.state_snapshot(session))
    events.append(protocol.notice(f"{player.name} played {card.fraction.text}."))
    return events
