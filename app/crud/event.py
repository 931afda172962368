"""
Event read operations.

This module contains the aggregation and listing queries over station records.
Every query is scoped either to one station or to all stations of a basin
(joined through ``stations.basin_name``) and most accept an ``EventFilter``
restricting the peak time to an inclusive range.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import and_, asc, desc, func
from sqlalchemy.sql import Select

from app.crud.base import CRUDReadOnly
from app.models.station import Station
from app.models.station_record import StationRecord


@dataclass(frozen=True)
class EventFilter:
    """
    Optional inclusive bounds on an event's peak time.

    Bounds are ``YYYY-MM-DD HH:MM:SS`` strings compared against the stored
    text timestamps. A missing bound leaves that side open.
    """

    start_ts: Optional[str] = None
    end_ts: Optional[str] = None

    def clauses(self) -> list:
        clauses = []
        if self.start_ts:
            clauses.append(StationRecord.peak_time >= self.start_ts)
        if self.end_ts:
            clauses.append(StationRecord.peak_time <= self.end_ts)
        return clauses


NO_FILTER = EventFilter()


@dataclass(frozen=True)
class StationScope:
    """Events of a single station."""

    station_id: str

    def apply(self, stmt: Select) -> Select:
        return stmt.where(StationRecord.station_id == self.station_id)


@dataclass(frozen=True)
class BasinScope:
    """Events of every station whose basin name equals ``basin_name`` exactly."""

    basin_name: str

    def apply(self, stmt: Select) -> Select:
        return stmt.join(
            Station, StationRecord.station_id == Station.station_id
        ).where(Station.basin_name == self.basin_name)


Scope = Union[StationScope, BasinScope]

EVENT_COLUMNS = (
    StationRecord.id,
    StationRecord.start_time,
    StationRecord.peak_time,
    StationRecord.end_time,
    StationRecord.start_value,
    StationRecord.peak_value,
    StationRecord.end_value,
    StationRecord.rise_time,
    StationRecord.fall_time,
    StationRecord.peak_time_str,
)


class CRUDEvent(CRUDReadOnly[StationRecord]):
    """
    Read operations for StationRecord model.

    The generic methods take a scope; the ``basin_*`` and ``station_*``
    wrappers are what the routers call.
    """

    def _scoped(self, scope: Scope, *columns, event_filter: EventFilter = NO_FILTER) -> Select:
        stmt = scope.apply(select(*columns).select_from(StationRecord))
        clauses = event_filter.clauses()
        if clauses:
            stmt = stmt.where(and_(*clauses))
        return stmt

    async def summary(self, db: AsyncSession, scope: Scope) -> Dict[str, Any]:
        """
        Count events and their time bounds, ignoring any peak range.

        Missing timestamps are skipped by min/max; with no events the count is
        0 and every time bound is None.

        Returns:
            Dict with total_events, first_start_time, last_end_time,
            min_peak_time and max_peak_time
        """
        stmt = self._scoped(
            scope,
            func.count(StationRecord.id).label("total_events"),
            func.min(StationRecord.start_time).label("first_start_time"),
            func.max(StationRecord.end_time).label("last_end_time"),
            func.min(StationRecord.peak_time).label("min_peak_time"),
            func.max(StationRecord.peak_time).label("max_peak_time"),
        )
        row = await self.fetch_one(db, stmt)
        row["total_events"] = row["total_events"] or 0
        return row

    async def filtered_summary(
        self, db: AsyncSession, scope: Scope, event_filter: EventFilter = NO_FILTER
    ) -> Dict[str, Any]:
        """
        Aggregate peak value, rise time and fall time over matched events.

        With no matches the count is 0 and every statistic is None.

        Returns:
            Dict with matched_events, max_peak_value, avg_peak_value,
            avg_rise_time and avg_fall_time
        """
        stmt = self._scoped(
            scope,
            func.count(StationRecord.id).label("matched_events"),
            func.max(StationRecord.peak_value).label("max_peak_value"),
            func.avg(StationRecord.peak_value).label("avg_peak_value"),
            func.avg(StationRecord.rise_time).label("avg_rise_time"),
            func.avg(StationRecord.fall_time).label("avg_fall_time"),
            event_filter=event_filter,
        )
        row = await self.fetch_one(db, stmt)
        row["matched_events"] = row["matched_events"] or 0
        return row

    async def matched_series(
        self, db: AsyncSession, scope: Scope, event_filter: EventFilter = NO_FILTER
    ) -> List[Dict[str, Any]]:
        """
        Peak timeline of matched events, oldest first.

        Events without a peak time or a peak value are left out.
        """
        stmt = self._scoped(
            scope,
            StationRecord.id,
            StationRecord.peak_time,
            StationRecord.peak_value,
            StationRecord.peak_time_str,
            event_filter=event_filter,
        ).where(
            StationRecord.peak_time.isnot(None),
            StationRecord.peak_value.isnot(None),
        ).order_by(asc(StationRecord.peak_time), asc(StationRecord.id))
        return await self.fetch_all(db, stmt)

    async def matched_events(
        self, db: AsyncSession, scope: Scope, event_filter: EventFilter = NO_FILTER
    ) -> List[Dict[str, Any]]:
        """Full rows of matched events, ascending by peak time."""
        columns = [StationRecord.station_id]
        if isinstance(scope, BasinScope):
            columns.append(Station.basin_name)
        stmt = self._scoped(
            scope, *EVENT_COLUMNS, *columns, event_filter=event_filter
        ).order_by(asc(StationRecord.peak_time), asc(StationRecord.id))
        return await self.fetch_all(db, stmt)

    async def recent_events(
        self, db: AsyncSession, scope: StationScope, limit: int = 20
    ) -> List[Dict[str, Any]]:
        """
        The ``limit`` most recent events by peak time, newest first.

        The peak range does not apply here.
        """
        stmt = self._scoped(scope, *EVENT_COLUMNS).order_by(
            desc(StationRecord.peak_time), desc(StationRecord.id)
        ).limit(limit)
        return await self.fetch_all(db, stmt)

    # Basin scope

    async def basin_summary(self, db: AsyncSession, *, basin_name: str) -> Dict[str, Any]:
        return await self.summary(db, BasinScope(basin_name))

    async def basin_filtered_summary(
        self, db: AsyncSession, *, basin_name: str, event_filter: EventFilter = NO_FILTER
    ) -> Dict[str, Any]:
        return await self.filtered_summary(db, BasinScope(basin_name), event_filter)

    async def basin_matched_series(
        self, db: AsyncSession, *, basin_name: str, event_filter: EventFilter = NO_FILTER
    ) -> List[Dict[str, Any]]:
        return await self.matched_series(db, BasinScope(basin_name), event_filter)

    async def basin_matched_events_detail(
        self, db: AsyncSession, *, basin_name: str, event_filter: EventFilter = NO_FILTER
    ) -> List[Dict[str, Any]]:
        return await self.matched_events(db, BasinScope(basin_name), event_filter)

    # Station scope

    async def station_summary(self, db: AsyncSession, *, station_id: str) -> Dict[str, Any]:
        return await self.summary(db, StationScope(station_id))

    async def station_filtered_summary(
        self, db: AsyncSession, *, station_id: str, event_filter: EventFilter = NO_FILTER
    ) -> Dict[str, Any]:
        return await self.filtered_summary(db, StationScope(station_id), event_filter)

    async def station_matched_series(
        self, db: AsyncSession, *, station_id: str, event_filter: EventFilter = NO_FILTER
    ) -> List[Dict[str, Any]]:
        return await self.matched_series(db, StationScope(station_id), event_filter)

    async def station_matched_events_detail(
        self, db: AsyncSession, *, station_id: str, event_filter: EventFilter = NO_FILTER
    ) -> List[Dict[str, Any]]:
        return await self.matched_events(db, StationScope(station_id), event_filter)

    async def station_recent_events(
        self, db: AsyncSession, *, station_id: str, limit: int = 20
    ) -> List[Dict[str, Any]]:
        return await self.recent_events(db, StationScope(station_id), limit)


event = CRUDEvent(StationRecord)
