"""Shared utility functions."""
from datetime import datetime, timezone

from src.shared.constants import SPLIT_TIMESTAMP_FORMAT


def compact_timestamp(moment: datetime | None = None) -> str:
    """Return *moment* (default: now, UTC) formatted as ``YYYYMMDDHHMMSS``."""
    moment = moment or datetime.now(timezone.utc)
    return moment.strftime(SPLIT_TIMESTAMP_FORMAT)
