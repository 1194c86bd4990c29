"""Translation of Supabase client errors into store failures."""

from collections.abc import Iterator
from contextlib import contextmanager

import httpx
from postgrest.exceptions import APIError

from calorie_tracker.domain.errors import StoreReadFailure, StoreWriteFailure

_CLIENT_ERRORS = (APIError, httpx.HTTPError)


@contextmanager
def store_read(action: str) -> Iterator[None]:
    """Raise ``StoreReadFailure`` when a query fails."""
    try:
        yield
    except _CLIENT_ERRORS as exc:
        raise StoreReadFailure(f"Failed to {action}") from exc


@contextmanager
def store_write(action: str) -> Iterator[None]:
    """Raise ``StoreWriteFailure`` when a write fails."""
    try:
        yield
    except _CLIENT_ERRORS as exc:
        raise StoreWriteFailure(f"Failed to {action}") from exc
