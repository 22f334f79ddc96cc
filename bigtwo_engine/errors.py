"""Exception types raised by the Big Two engine."""


class BigTwoError(ValueError):
    """Base class for all engine errors."""


class PlayRejectedError(BigTwoError):
    """A player action that was refused; the match state is unchanged."""

    code = "rejected"

    def __init__(self, message: str = "", player_id=None):
        super().__init__(message or self.code)
        self.player_id = player_id

    @property
    def reason(self) -> str:
        return str(self)


class InvalidCombination(PlayRejectedError):
    """Cards do not form a single, pair or recognized five-card hand."""

    code = "invalid_combination"


class IllegalPlay(PlayRejectedError):
    """A recognized combination that does not beat the table."""

    code = "illegal_play"


class OutOfTurn(PlayRejectedError):
    """Action from a seat that does not hold the turn."""

    code = "out_of_turn"


class OpeningViolation(PlayRejectedError):
    """The first play of the match omits the opening card."""

    code = "opening_violation"


class EmptyTablePass(PlayRejectedError):
    """Pass attempted while the seat holds the lead."""

    code = "empty_table_pass"


class MatchNotInProgress(PlayRejectedError):
    """Action arrived after the match ended or the room closed."""

    code = "match_not_in_progress"


class UnknownPlayer(PlayRejectedError):
    """Player id does not hold a seat in this match."""

    code = "unknown_player"


class AIFailure(BigTwoError):
    """Internal fault while computing an AI decision."""


class SeatingError(BigTwoError):
    """Seating and hands are inconsistent at match start."""


class RoomError(BigTwoError):
    """Room registry misuse."""


class InvariantViolation(BigTwoError):
    """Match state broke a conservation or counter invariant."""
