"""
Monitoring station database model.

This module contains the Station model representing hydrological monitoring
sites. Rows are loaded by the ingestion process and never modified here.
"""

from sqlalchemy import Column, Float, Index, Integer, Text

from app.database import Base


class Station(Base):
    """
    Hydrological monitoring station.

    Each station is identified by a unique, immutable ``station_id``. Some
    stations have no known coordinates. Basins are not stored separately:
    stations sharing a ``basin_name`` form a basin.
    """

    __tablename__ = "stations"

    station_id = Column(Text, primary_key=True, comment="Unique station identifier")
    latitude = Column(Float, nullable=True, comment="Latitude in degrees")
    longitude = Column(Float, nullable=True, comment="Longitude in degrees")
    basin_name = Column(Text, nullable=True, comment="Basin the station belongs to")
    river_name = Column(Text, nullable=True, comment="River name")
    station_name = Column(Text, nullable=True, comment="Primary display name")
    station_name2 = Column(Text, nullable=True, comment="Alternate display name")
    station_name3 = Column(Text, nullable=True, comment="Alternate display name")
    description = Column(Text, nullable=True)
    has_data = Column(Integer, default=0, comment="1 when event records exist")

    __table_args__ = (
        Index("idx_stations_has_data", "has_data"),
        Index("idx_stations_basin", "basin_name"),
        Index("idx_stations_river", "river_name"),
    )

    def __repr__(self):
        return f"<Station(station_id='{self.station_id}', name='{self.station_name}')>"
