from __future__ import annotations

from datetime import date, datetime, timezone


def today_local() -> date:
    """Current local date.

    Note: Wrapped so tests can patch it easily.
    """
    return date.today()


def now_utc() -> datetime:
    return datetime.now(timezone.utc)
