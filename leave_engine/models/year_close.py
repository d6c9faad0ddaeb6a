from __future__ import annotations

from leave_engine.models.base import RecordBase


class YearCloseMeta(RecordBase):
    """Process-wide year-close bookkeeping.

    ``version`` increases on every recorded change so a store can detect
    lost updates.
    """

    last_closed_year: int = 0
    last_reminder_year: int = 0
    version: int = 0
