from __future__ import annotations

from datetime import datetime


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier. The attendance day is the
    date component of this value, with no timezone anchoring.
    """
    return datetime.now()
