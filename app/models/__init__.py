# Database models package

from app.models.station import Station
from app.models.station_record import StationRecord

__all__ = [
    "Station",
    "StationRecord",
]
