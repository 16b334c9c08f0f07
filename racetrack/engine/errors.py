class ExhaustedMovesError(RuntimeError):
    """A strategy was asked for a move after its finite input ran out."""


class NoSafeMoveError(RuntimeError):
    """The trajectory search found no crash-free route to the finish."""


class DegenerateSetupError(RuntimeError):
    """Every car was assigned a strategy that never moves."""


class RaceTimeoutError(RuntimeError):
    """The race hit its turn limit without a winner."""
