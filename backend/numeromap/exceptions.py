class NumerologyError(ValueError):
    """Base error for the calculation engine and interpretation resolver."""


class InvalidDateError(NumerologyError):
    """Day, month or year cannot form a valid calendar date."""


class UnknownPillarError(NumerologyError):
    """Pillar identifier is not one of the five known pillars."""


class CalculationMismatchError(NumerologyError):
    """A map value does not match what its claimed inputs produce."""
