"""Helpers that work on repository records returned by the API."""

from collections.abc import Iterable, Mapping
from datetime import datetime, timezone
from typing import Any

from ghclone.output import FatalError

_CREATED_AT_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def parse_created_at(value: str) -> datetime:
    """Parse a ``created_at`` timestamp such as ``2006-01-02T15:04:05Z``."""
    try:
        parsed = datetime.strptime(value, _CREATED_AT_FORMAT)
    except ValueError as exc:
        raise FatalError(f'parsing time "{value}": {exc}') from exc
    return parsed.replace(tzinfo=timezone.utc)


def get_latest_repository(
    repos: Iterable[Mapping[str, Any]],
) -> Mapping[str, Any] | None:
    """Return the most recently created repository, the first one on ties.

    Repositories created no later than the Unix epoch are never chosen, so
    the result is None when there are none after it.
    """
    latest = None
    latest_created_at = _EPOCH
    for repo in repos:
        created_at = parse_created_at(repo["created_at"])
        if created_at > latest_created_at:
            latest = repo
            latest_created_at = created_at
    return latest