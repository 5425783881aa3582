"""Exception hierarchy for the allocation engine.

Per-item placement failures are never raised; they are reported as
``UnplacedItem`` entries with a ``ReasonCode``.  The exceptions below cover
the conditions that abort a whole call.
"""


class LoadPlannerError(Exception):
    """Base class for all engine errors."""


class InvalidItemsError(LoadPlannerError):
    """Item list is missing, empty, or contains malformed rows."""


class ContainerPoolError(LoadPlannerError):
    """Container catalog could not be read or contains malformed entries."""


class ConfigError(LoadPlannerError):
    """Engine settings are out of range or could not be loaded."""
