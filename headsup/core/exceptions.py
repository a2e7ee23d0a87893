"""
Engine exceptions.

Rejected player or dealer requests are not exceptions; they come back as a
failed ``ActionResult``. These classes signal caller or engine bugs.
"""


class PokerEngineError(Exception):
    """Base class for engine errors."""
    pass


class InvariantViolation(PokerEngineError):
    """A state-machine contract was broken (e.g. next round after the river)."""
    pass
