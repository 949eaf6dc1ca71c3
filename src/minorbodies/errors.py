"""
Exception taxonomy for the population engine.

Precondition violations are raised before any state is touched, so a caller
that catches one can keep using the group. Decode errors leave the group in
its last consistent state; the owner is expected to discard or retry the
whole group.
"""


class PopulationError(Exception):
    """Base class for all errors raised by minorbodies."""
    pass


class PreconditionViolation(PopulationError):
    """A caller broke an operation's contract (wrong mode, full capacity, duplicate key, ...)."""
    pass


class BlobDecodeError(PopulationError):
    """A persisted blob does not match the column layout of the target group."""
    pass


class ConfigurationError(PopulationError):
    """Process-wide settings are invalid or inconsistent."""
    pass
