"""
Station record (flash-flood event) database model.

Each row is one detected rise/peak/fall cycle at a station. Timestamps are
stored as ``YYYY-MM-DD HH:MM:SS`` text, so string comparison orders them.
"""

from sqlalchemy import Column, Float, ForeignKey, Index, Integer, Text

from app.database import Base


class StationRecord(Base):
    """
    Hydrological event recorded at a station.

    Any of the start/peak/end timestamps may be missing. ``rise_time`` and
    ``fall_time`` are durations; ``peak_time_str`` is a human-readable label
    stored alongside ``peak_time``.
    """

    __tablename__ = "station_records"

    id = Column(Integer, primary_key=True, autoincrement=True)
    station_id = Column(Text, ForeignKey("stations.station_id"), nullable=True)

    start_time = Column(Text, nullable=True)
    peak_time = Column(Text, nullable=True)
    end_time = Column(Text, nullable=True)

    start_value = Column(Float, nullable=True)
    peak_value = Column(Float, nullable=True)
    end_value = Column(Float, nullable=True)

    rise_time = Column(Float, nullable=True)
    fall_time = Column(Float, nullable=True)

    peak_time_str = Column(Text, nullable=True)

    __table_args__ = (
        Index("idx_records_peak_value", "peak_value"),
        Index("idx_records_station_time", "station_id", "peak_time"),
        Index("idx_records_peak_time", "peak_time"),
    )

    def __repr__(self):
        return f"<StationRecord(id={self.id}, station_id='{self.station_id}', peak_time='{self.peak_time}')>"
