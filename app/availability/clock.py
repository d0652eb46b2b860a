"""Injectable source of the current civil time."""

from datetime import datetime
from typing import Protocol

from app.availability.timezone import CIVIL_TZ


class Clock(Protocol):
    """Anything that can tell the current time in the civil zone."""

    def now(self) -> datetime: ...


class SystemClock:
    """Wall clock of the host, expressed in the civil zone."""

    def now(self) -> datetime:
        return datetime.now(CIVIL_TZ)
