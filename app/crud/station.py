"""
Station read operations.

This module contains the station listing used by the map: keyword search,
has-data filtering and pagination.
"""

import math
from typing import List, Optional, Tuple
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy import and_, asc, desc, func, or_

from app.crud.base import CRUDReadOnly
from app.models.station import Station

HAS_DATA_VALUES = ("0", "1")


class CRUDStation(CRUDReadOnly[Station]):
    """
    Read operations for Station model.
    """

    def _conditions(self, keyword: str, has_data: Optional[str]) -> list:
        conditions = []

        if keyword:
            pattern = f"%{keyword}%"
            conditions.append(
                or_(
                    Station.station_id.ilike(pattern),
                    Station.station_name.ilike(pattern),
                    Station.station_name2.ilike(pattern),
                    Station.station_name3.ilike(pattern),
                    Station.river_name.ilike(pattern),
                    Station.basin_name.ilike(pattern),
                )
            )

        # Only the two flag values filter; anything else is ignored
        if has_data in HAS_DATA_VALUES:
            conditions.append(Station.has_data == int(has_data))

        return conditions

    async def count(
        self, db: AsyncSession, *, keyword: str = "", has_data: Optional[str] = None
    ) -> int:
        """
        Count stations matching the keyword and has-data filter.

        Args:
            db: Database session
            keyword: Substring searched in ids, names, river and basin
            has_data: "0" or "1" to filter by the has-data flag

        Returns:
            Number of matching stations
        """
        stmt = select(func.count()).select_from(self.model)
        conditions = self._conditions(keyword, has_data)
        if conditions:
            stmt = stmt.where(and_(*conditions))
        return await self.fetch_scalar(db, stmt)

    async def list_stations(
        self,
        db: AsyncSession,
        *,
        keyword: str = "",
        has_data: Optional[str] = None,
        page: int = 1,
        page_size: int = 200,
    ) -> Tuple[List[Station], int, int]:
        """
        List stations with search and pagination.

        Stations with data come first, then ascending station id. A page
        beyond the last one returns no items.

        Args:
            db: Database session
            keyword: Case-insensitive substring; empty means no search
            has_data: "0" or "1" to filter by the has-data flag
            page: 1-based page number
            page_size: Number of stations per page

        Returns:
            Tuple of (stations, total matching, total pages)
        """
        page = max(page, 1)
        page_size = max(page_size, 1)
        conditions = self._conditions(keyword, has_data)

        total = await self.count(db, keyword=keyword, has_data=has_data)

        stmt = select(self.model)
        if conditions:
            stmt = stmt.where(and_(*conditions))
        stmt = (
            stmt.order_by(desc(Station.has_data), asc(Station.station_id))
            .offset((page - 1) * page_size)
            .limit(page_size)
        )
        items = await self.fetch_models(db, stmt)

        return items, total, math.ceil(total / page_size)


station = CRUDStation(Station)
