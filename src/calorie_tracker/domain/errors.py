"""Errors raised by the summary and streak services."""


class StoreError(Exception):
    """Base class for local store failures."""


class StoreReadFailure(StoreError):
    """A query against the meal, profile, summary or streak store failed."""


class StoreWriteFailure(StoreError):
    """Saving or deleting records failed."""


class MealNotFoundError(LookupError):
    """Raised when a meal id does not exist."""
