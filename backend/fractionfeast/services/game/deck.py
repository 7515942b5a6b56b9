"""Card and deck generation, round initialisation and dealing."""
from functools import reduce as fold
from typing import List

from fractionfeast.models import Card, GameSession
from .arithmetic import ZERO, add

CARD_IMAGES = ('pizza.png', 'watermelon.png', 'cake.png', 'icecream.png')
MIN_DENOMINATOR = 2
MAX_DENOMINATOR = 12


def random_card(rng) -> Card:
    denominator = rng.randint(MIN_DENOMINATOR, MAX_DENOMINATOR)
    numerator = rng.randint(1, denominator)
    return Card(numerator, denominator, rng.choice(CARD_IMAGES))


def generate_deck(rng, size: int = 100) -> List[Card]:
    # Cards are drawn independently; duplicates are expected
    return [random_card(rng) for _ in range(size)]


def initialize_round(session: GameSession) -> None:
    """Fresh deck and target, empty plate and table.

    Between ``target_cards_min`` and ``target_cards_max`` cards are taken off
    the deck tail and summed into the target. Seats are cleared; callers
    re-pad them with placeholders or re-seat real players.
    """
    deck = generate_deck(session.rng, session.deck_size)
    count = session.rng.randint(session.target_cards_min, session.target_cards_max)
    split = max(len(deck) - count, 0)
    target_cards = deck[split:]
    del deck[split:]

    session.deck = deck
    session.target_fraction = fold(add, (c.fraction for c in target_cards), ZERO)
    session.plate_fraction = ZERO
    session.seats = []
    session.current_seat_index = 0
    session.winner_name = None
    session.round_number += 1


def deal_initial_hand(session: GameSession, count: int = None) -> List[Card]:
    """Pop up to ``count`` cards off the deck; fewer when it runs short."""
    if count is None:
        count = session.hand_size
    cards = []
    for _ in range(count):
        card = session.draw()
        if card is None:
            break
        cards.append(card)
    return cards
