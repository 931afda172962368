# Repository package

from app.crud.base import CRUDReadOnly
from app.crud.station import CRUDStation, station
from app.crud.event import (
    CRUDEvent, EventFilter, StationScope, BasinScope, event,
)

__all__ = [
    "CRUDReadOnly",
    "CRUDStation", "station",
    "CRUDEvent", "EventFilter", "StationScope", "BasinScope", "event",
]
