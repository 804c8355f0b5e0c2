from signups.domain.models import (
    AvailableSheet,
    ClosedSheet,
    FullSheet,
    SheetState,
    open_sheet,
)
from signups.domain.value_objects import AttendeeId, Capacity, SessionId

__all__ = [
    "AvailableSheet",
    "FullSheet",
    "ClosedSheet",
    "SheetState",
    "open_sheet",
    "SessionId",
    "AttendeeId",
    "Capacity",
]
