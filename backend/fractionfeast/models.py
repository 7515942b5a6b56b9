"""In-memory game records: cards, seated players and the shared session."""
import random
from dataclasses import dataclass, field
from typing import List, Optional

from fractionfeast.services.game.arithmetic import Fraction, ZERO, to_mixed_number

PLACEHOLDER_PREFIX = 'dummy-'
SEAT_COUNT = 4


@dataclass(frozen=True)
class Card:
    numerator: int
    denominator: int
    image: str = 'pizza.png'

    @property
    def fraction(self) -> Fraction:
        return Fraction(self.numerator, self.denominator)

    @property
    def decimal_value(self) -> float:
        return self.numerator / self.denominator

    def to_dict(self):
        return {
            'numerator': self.numerator,
            'denominator': self.denominator,
            'fraction': f"{self.numerator}/{self.denominator}",
            'decimal_value': self.decimal_value,
            'image': self.image,
        }


@dataclass
class Player:
    id: str
    name: str
    hand: List[Card] = field(default_factory=list)

    @property
    def is_placeholder(self) -> bool:
        return is_placeholder_id(self.id)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'hand': [c.to_dict() for c in self.hand],
            'is_placeholder': self.is_placeholder,
        }


def is_placeholder_id(player_id) -> bool:
    return isinstance(player_id, str) and player_id.startswith(PLACEHOLDER_PREFIX)


@dataclass
class GameSession:
    """The single shared table.

    Plate and target decimals are derived from their reduced fractions so
    the two representations can never drift apart.
    """
    rng: random.Random = field(default_factory=random.Random)
    seats: List[Player] = field(default_factory=list)
    deck: List[Card] = field(default_factory=list)
    plate_fraction: Fraction = ZERO
    target_fraction: Fraction = Fraction(1, 1)
    current_seat_index: int = 0
    winner_name: Optional[str] = None
    round_number: int = 0
    next_player_number: int = 1
    hand_size: int = 5
    deck_size: int = 100
    target_cards_min: int = 3
    target_cards_max: int = 5
    skip_placeholder_turns: bool = False

    @property
    def plate_value(self) -> float:
        return self.plate_fraction.value

    @property
    def target_value(self) -> float:
        return self.target_fraction.value

    @property
    def current_player(self) -> Player:
        return self.seats[self.current_seat_index]

    @property
    def real_players(self) -> List[Player]:
        return [p for p in self.seats if not p.is_placeholder]

    def find_player(self, player_id) -> Optional[Player]:
        for p in self.seats:
            if p.id == player_id:
                return p
        return None

    def draw(self) -> Optional[Card]:
        """Pop one card from the deck tail, or None when the deck is empty."""
        return self.deck.pop() if self.deck else None

    def snapshot(self):
        return {
            'seats': [p.to_dict() for p in self.seats],
            'deck_remaining_count': len(self.deck),
            'plate_value': self.plate_value,
            'plate_fraction': self.plate_fraction.text,
            'plate_mixed': to_mixed_number(*self.plate_fraction),
            'target_value': self.target_value,
            'target_fraction': self.target_fraction.text,
            'target_mixed': to_mixed_number(*self.target_fraction),
            'current_seat_index': self.current_seat_index,
            'winner_name': self.winner_name,
            'round_number': self.round_number,
        }
