import random

import pytest

from fractionfeast.models import Card, GameSession, Player
from fractionfeast.services.game import protocol
from fractionfeast.services.game.arithmetic import Fraction, ZERO
from fractionfeast.services.game.errors import InvalidCardIndex, NotYourTurn, RoundOver
from fractionfeast.services.game.seats import ensure_four_seats
from fractionfeast.services.game.turns import BUST, NORMAL, WIN, has_valid_move, play_card, resolve_play


def make_table(plate, target, hand, deck=None, other_hand=None, real_seats=2):
    session = GameSession(rng=random.Random(0))
    session.seats = [Player('a', 'Player 1', list(hand))]
    if real_seats >= 2:
        session.seats.append(Player('b', 'Player 2', list(other_hand or [Card(1, 12)])))
    for i in range(2, real_seats):
        session.seats.append(Player(f"p{i}", f"Player {i + 1}", [Card(1, 12)]))
    ensure_four_seats(session)
    session.plate_fraction = plate
    session.target_fraction = target
    session.deck = list(deck or [])
    return session


def names(events):
    return [e.name for e in events]


def notices(events):
    return [e.payload['text'] for e in events if e.name == protocol.NOTICE]


def test_not_your_turn_leaves_state_untouched():
    session = make_table(ZERO, Fraction(1, 1), [Card(1, 2)], deck=[Card(1, 3)])
    before = session.snapshot()
    with pytest.raises(NotYourTurn):
        play_card(session, 'b', 0)
    assert session.snapshot() == before


def test_placeholder_seat_cannot_act():
    session = make_table(ZERO, Fraction(1, 1), [Card(1, 2)])
    session.current_seat_index = 2
    with pytest.raises(NotYourTurn):
        play_card(session, 'dummy-2', 0)
    with pytest.raises(NotYourTurn):
        play_card(session, 'a', 0)


@pytest.mark.parametrize('card_index', [1, 5, -1, '0', None, True, 0.0])
def test_invalid_card_index(card_index):
    session = make_table(ZERO, Fraction(1, 1), [Card(1, 2)], deck=[Card(1, 3)])
    before = session.snapshot()
    with pytest.raises(InvalidCardIndex):
        play_card(session, 'a', card_index)
    assert session.snapshot() == before


def test_exact_win_snaps_plate_to_target():
    session = make_table(ZERO, Fraction(1, 2), [Card(1, 2), Card(1, 3)], deck=[Card(1, 4)])
    events = play_card(session, 'a', 0)

    assert names(events) == [protocol.STATE_SNAPSHOT, protocol.NOTICE, protocol.ROUND_OVER]
    assert notices(events) == ['Player 1 wins! Close enough to the target: 1/2']
    assert events[2].payload == {'winner_name': 'Player 1'}
    assert session.plate_fraction == Fraction(1, 2)
    assert session.plate_value == 0.5
    # the winning card is not replaced and the turn does not move
    assert session.seats[0].hand == [Card(1, 3)]
    assert session.deck == [Card(1, 4)]
    assert session.current_seat_index == 0
    assert session.winner_name == 'Player 1'


def test_win_within_tolerance_above_target():
    # 11/20 lands exactly 0.05 past 1/2: inclusive boundary
    session = make_table(ZERO, Fraction(1, 2), [Card(11, 20)])
    events = play_card(session, 'a', 0)
    assert protocol.ROUND_OVER in names(events)
    assert session.plate_fraction == session.target_fraction


def test_win_within_tolerance_below_target():
    session = make_table(Fraction(1, 4), Fraction(4, 5), [Card(1, 2)])
    events = play_card(session, 'a', 0)
    assert protocol.ROUND_OVER in names(events)
    assert session.plate_fraction == Fraction(4, 5)


def test_just_past_tolerance_is_bust():
    session = make_table(ZERO, Fraction(1, 2), [Card(5501, 10000)], deck=[Card(1, 3)])
    events = play_card(session, 'a', 0)
    assert protocol.ROUND_OVER not in names(events)
    assert session.plate_fraction == ZERO
    assert session.current_seat_index == 1


def test_bust_discards_and_draws():
    hand = [Card(1, 2), Card(1, 12)]
    session = make_table(Fraction(9, 10), Fraction(1, 1), hand, deck=[Card(1, 3), Card(1, 4)])
    events = play_card(session, 'a', 0)

    assert names(events) == [protocol.NOTICE, protocol.STATE_SNAPSHOT]
    assert notices(events) == ['Bust! Player 1 went over the target and discarded 1/2.']
    assert session.plate_fraction == Fraction(9, 10)
    assert session.seats[0].hand == [Card(1, 12), Card(1, 4)]
    assert session.deck == [Card(1, 3)]
    assert session.current_seat_index == 1


def test_bust_without_valid_move_forces_extra_discard():
    hand = [Card(1, 2), Card(1, 3)]
    deck = [Card(1, 6), Card(1, 5), Card(1, 4)]
    session = make_table(Fraction(9, 10), Fraction(1, 1), hand, deck=deck)
    events = play_card(session, 'a', 0)

    assert names(events) == [protocol.NOTICE, protocol.NOTICE, protocol.STATE_SNAPSHOT]
    assert notices(events)[1] == 'Player 1 has no valid moves and must discard and draw.'
    # 1/3 force-discarded, 1/4 drawn for it, 1/5 drawn for the bust
    assert session.seats[0].hand == [Card(1, 4), Card(1, 5)]
    assert session.deck == [Card(1, 6)]
    assert session.current_seat_index == 1


def test_bust_with_empty_deck_and_last_card():
    session = make_table(Fraction(9, 10), Fraction(1, 1), [Card(1, 2)])
    play_card(session, 'a', 0)
    assert session.seats[0].hand == []
    assert session.plate_fraction == Fraction(9, 10)
    assert session.current_seat_index == 1


def test_normal_play_adds_to_plate():
    session = make_table(ZERO, Fraction(1, 1), [Card(1, 3), Card(1, 2)], deck=[Card(1, 4)])
    events = play_card(session, 'a', 0)

    assert names(events) == [protocol.STATE_SNAPSHOT, protocol.NOTICE]
    assert notices(events) == ['Player 1 played 1/3.']
    assert session.plate_fraction == Fraction(1, 3)
    assert session.seats[0].hand == [Card(1, 2), Card(1, 4)]
    assert session.deck == []
    assert session.current_seat_index == 1
    snapshot = events[0].payload
    assert snapshot['plate_fraction'] == '1/3'
    assert snapshot['deck_remaining_count'] == 0
    assert snapshot['current_seat_index'] == 1


def test_normal_play_reduces_plate_fraction():
    session = make_table(Fraction(1, 6), Fraction(2, 1), [Card(2, 6)], deck=[Card(1, 4)])
    play_card(session, 'a', 0)
    assert session.plate_fraction == Fraction(1, 2)
    assert session.plate_value == 0.5


def test_normal_play_with_empty_deck():
    session = make_table(ZERO, Fraction(3, 1), [Card(1, 3), Card(1, 2)])
    events = play_card(session, 'a', 1)

    assert names(events) == [protocol.NOTICE, protocol.STATE_SNAPSHOT, protocol.NOTICE]
    assert notices(events)[0] == 'Deck is empty! No more cards can be drawn.'
    assert session.seats[0].hand == [Card(1, 3)]


def test_turn_wraps_over_four_seats():
    session = make_table(ZERO, Fraction(5, 1), [Card(1, 12)], real_seats=4)
    session.seats[3].hand = [Card(1, 2)]
    session.current_seat_index = 3
    play_card(session, 'p3', 0)
    assert session.current_seat_index == 0


def test_rotation_lands_on_placeholder_by_default():
    session = make_table(ZERO, Fraction(5, 1), [Card(1, 12)], other_hand=[Card(1, 2)])
    session.current_seat_index = 1
    play_card(session, 'b', 0)
    assert session.current_seat_index == 2
    assert session.current_player.is_placeholder


def test_rotation_skips_placeholders_when_enabled():
    session = make_table(ZERO, Fraction(5, 1), [Card(1, 12)], other_hand=[Card(1, 2)])
    session.skip_placeholder_turns = True
    session.current_seat_index = 1
    play_card(session, 'b', 0)
    assert session.current_seat_index == 0


def test_play_after_win_is_rejected():
    session = make_table(ZERO, Fraction(1, 2), [Card(1, 2)], other_hand=[Card(1, 3)])
    play_card(session, 'a', 0)
    before = session.snapshot()
    with pytest.raises(RoundOver):
        play_card(session, 'a', 0)
    assert session.snapshot() == before


def test_has_valid_move():
    session = make_table(Fraction(9, 10), Fraction(1, 1), [Card(1, 3), Card(1, 12)])
    assert has_valid_move(session, session.seats[0])
    session.seats[0].hand = [Card(1, 3)]
    assert not has_valid_move(session, session.seats[0])
    session.seats[0].hand = []
    assert not has_valid_move(session, session.seats[0])


@pytest.mark.parametrize('hand, target, expected', [
    ([Card(1, 2)], Fraction(1, 2), WIN),
    ([Card(1, 2)], Fraction(1, 4), BUST),
    ([Card(1, 3)], Fraction(1, 1), NORMAL),
])
def test_resolve_play_reports_outcome(hand, target, expected):
    session = make_table(ZERO, target, hand, deck=[Card(1, 5)])
    outcome, events = resolve_play(session, 'a', 0)
    assert outcome == expected
    assert protocol.STATE_SNAPSHOT in names(events)


def test_round_over_reported_before_wrong_seat():
    session = make_table(ZERO, Fraction(1, 2), [Card(1, 2)], other_hand=[Card(1, 3)])
    play_card(session, 'a', 0)
    with pytest.raises(RoundOver):
        play_card(session, 'b', 0)
