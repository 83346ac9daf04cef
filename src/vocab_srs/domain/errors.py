"""Exceptions raised by the scheduling engine and its storage ports."""


class SchedulingError(Exception):
    """Base class for every error raised by vocab_srs."""


class InvalidInputError(SchedulingError, ValueError):
    """A caller passed a value outside the documented domain (quality, difficulty, ...)."""


class InvariantViolationError(SchedulingError):
    """A card was about to be built in a state that must never exist."""


class CardNotFoundError(SchedulingError, LookupError):
    """The repository holds no card with the requested id."""

    def __init__(self, card_id: str):
        super().__init__(f"Card not found: {card_id}")
        self.card_id = card_id


class ConcurrencyConflictError(SchedulingError):
    """A save lost a compare-and-swap race on the card revision."""

    def __init__(self, card_id: str, expected: int | None, actual: int | None):
        super().__init__(
            f"Revision conflict on {card_id}: expected {expected}, found {actual}"
        )
        self.card_id = card_id
        self.expected = expected
        self.actual = actual
