"""Validation failures raised by the turn engine.

All of them are local to the requester: they are raised before any state
is touched and are reported back privately as ``action_error``.

A play is checked for ``RoundOver`` first, then ``NotYourTurn``, then
``InvalidCardIndex``. Once a round is won every play is answered with
``round_over``, including one from a seat whose turn it is not.
"""


class GameError(Exception):
    code = 'game_error'
    message = 'Action rejected'

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class NotYourTurn(GameError):
    code = 'not_your_turn'
    message = 'Not your turn'


class InvalidCardIndex(GameError):
    code = 'invalid_card_index'
    message = 'Invalid card index'


class RoundOver(GameError):
    code = 'round_over'
    message = 'The round is over, waiting for the next round to start'


class TableFull(GameError):
    code = 'table_full'
    message = 'All four seats are taken'


class RoundInProgress(GameError):
    code = 'round_in_progress'
    message = 'The next round can only start once the current round is won'
