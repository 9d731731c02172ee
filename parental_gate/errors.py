"""Errors for the parental gate."""


class ParentalGateError(RuntimeError):
    """Base class for all domain errors."""


class ChallengeError(ParentalGateError):
    """Raised when a challenge's correct answer is not among its options."""


class ChallengePoolError(ParentalGateError):
    """Raised when a challenge pool is empty or cannot be loaded."""


class GateConfigError(ParentalGateError):
    """Raised when a gate config fails validation."""


class SchedulerError(ParentalGateError):
    """Raised when a scheduler is used after it was stopped."""
