from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from fastapi import Depends, Query

from delivery_app.core.config import Settings, get_settings
from delivery_app.core.errors import MissingParameter


def utcnow() -> datetime:
    # Naive UTC, matching how timestamps are stored
    return datetime.utcnow()


@dataclass
class RequestContext:
    """Per-request state handed to handlers instead of global session state."""
    settings: Settings
    clock: Callable[[], datetime] = utcnow
    _now: Optional[datetime] = field(default=None, repr=False)

    @property
    def now(self) -> datetime:
        # Frozen on first read so one request sees one "now"
        if self._now is None:
            self._now = self.clock()
        return self._now


def get_clock() -> Callable[[], datetime]:
    return utcnow


def get_context(
    settings: Settings = Depends(get_settings),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> RequestContext:
    return RequestContext(settings=settings, clock=clock)


def require_driver_id(driver_id: Optional[str] = Query(None, alias="driverId")) -> str:
    if not driver_id:
        raise MissingParameter("Driver ID is required")
    return driver_id
