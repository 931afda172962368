"""
Tests for the event repository, station and basin scope.
"""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from app.crud.event import BasinScope, EventFilter, StationScope, event as event_crud
from app.utils.params import resolve_peak_range

SPRING_2020 = EventFilter(start_ts="2020-03-01 00:00:00", end_ts="2020-05-31 23:59:59")
EMPTY_STATS = {
    "matched_events": 0,
    "max_peak_value": None,
    "avg_peak_value": None,
    "avg_rise_time": None,
    "avg_fall_time": None,
}


def test_filter_clauses():
    assert EventFilter().clauses() == []
    assert len(EventFilter(start_ts="2020-01-01 00:00:00").clauses()) == 1
    assert len(SPRING_2020.clauses()) == 2


class TestStationScope:
    """Queries scoped to a single station."""

    @pytest.mark.asyncio
    async def test_summary(self, db_session: AsyncSession):
        summary = await event_crud.station_summary(db_session, station_id="A001")

        assert summary == {
            "total_events": 3,
            "first_start_time": "2020-02-28 20:00:00",
            "last_end_time": "2021-07-10 09:00:00",
            "min_peak_time": "2020-03-01 00:00:00",
            "max_peak_time": "2021-07-10 03:00:00",
        }

    @pytest.mark.asyncio
    async def test_summary_ignores_missing_timestamps(self, db_session: AsyncSession):
        summary = await event_crud.station_summary(db_session, station_id="A002")

        assert summary["total_events"] == 3
        assert summary["first_start_time"] == "2019-12-01 00:00:00"
        assert summary["last_end_time"] == "2020-04-20 13:00:00"
        assert summary["min_peak_time"] == "2020-04-15 12:00:00"

    @pytest.mark.asyncio
    async def test_summary_of_unknown_station(self, db_session: AsyncSession):
        summary = await event_crud.station_summary(db_session, station_id="Z999")

        assert summary == {
            "total_events": 0,
            "first_start_time": None,
            "last_end_time": None,
            "min_peak_time": None,
            "max_peak_time": None,
        }

    @pytest.mark.asyncio
    async def test_filtered_summary_without_range(self, db_session: AsyncSession):
        stats = await event_crud.station_filtered_summary(db_session, station_id="A001")

        assert stats["matched_events"] == 3
        assert stats["max_peak_value"] == 5.0
        assert stats["avg_peak_value"] == pytest.approx(3.0)
        assert stats["avg_rise_time"] == pytest.approx(4.0)
        assert stats["avg_fall_time"] == pytest.approx(16.0 / 3)

    @pytest.mark.asyncio
    async def test_range_bounds_are_inclusive(self, db_session: AsyncSession):
        """Peaks at 00:00:00 of the first day and 23:59:59 of the last day match."""
        stats = await event_crud.station_filtered_summary(
            db_session, station_id="A001", event_filter=SPRING_2020
        )

        assert stats["matched_events"] == 2
        assert stats["max_peak_value"] == 5.0

    @pytest.mark.asyncio
    async def test_one_sided_ranges(self, db_session: AsyncSession):
        after = await event_crud.station_filtered_summary(
            db_session, station_id="A001", event_filter=resolve_peak_range("2020-06-01", None)
        )
        before = await event_crud.station_filtered_summary(
            db_session, station_id="A001", event_filter=resolve_peak_range(None, "2020-05-31")
        )

        assert after["matched_events"] == 1
        assert after["max_peak_value"] == 3.0
        assert before["matched_events"] == 2

    @pytest.mark.asyncio
    async def test_no_match_gives_null_statistics(self, db_session: AsyncSession):
        stats = await event_crud.station_filtered_summary(
            db_session, station_id="A001", event_filter=resolve_peak_range("2020-03-02", "2020-05-30")
        )

        assert stats == EMPTY_STATS

    @pytest.mark.asyncio
    async def test_matched_series_skips_missing_peak_value(self, db_session: AsyncSession):
        series = await event_crud.station_matched_series(
            db_session, station_id="A002", event_filter=resolve_peak_range("2020-04-01", "2020-04-30")
        )

        assert series == [
            {"id": 5, "peak_time": "2020-04-20 08:00:00", "peak_value": 2.5,
             "peak_time_str": "2020/04/20 08:00"},
        ]

    @pytest.mark.asyncio
    async def test_matched_series_skips_missing_peak_time(self, db_session: AsyncSession):
        series = await event_crud.station_matched_series(db_session, station_id="A002")

        assert [point["id"] for point in series] == [5]

    @pytest.mark.asyncio
    async def test_matched_series_is_ascending(self, db_session: AsyncSession):
        series = await event_crud.station_matched_series(db_session, station_id="A001")

        assert [point["peak_value"] for point in series] == [1.0, 5.0, 3.0]
        assert [point["peak_time"] for point in series] == sorted(p["peak_time"] for p in series)

    @pytest.mark.asyncio
    async def test_matched_events_detail(self, db_session: AsyncSession):
        rows = await event_crud.station_matched_events_detail(
            db_session, station_id="A002", event_filter=resolve_peak_range("2020-04-01", "2020-04-30")
        )

        assert [row["id"] for row in rows] == [4, 5]
        assert rows[0]["peak_value"] is None
        assert rows[0]["station_id"] == "A002"
        assert "basin_name" not in rows[0]
        assert set(rows[1]) == {
            "id", "station_id", "start_time", "peak_time", "end_time",
            "start_value", "peak_value", "end_value", "rise_time", "fall_time",
            "peak_time_str",
        }

    @pytest.mark.asyncio
    async def test_recent_events_newest_first(self, db_session: AsyncSession):
        rows = await event_crud.station_recent_events(db_session, station_id="A001", limit=2)

        assert [row["id"] for row in rows] == [3, 2]
        assert "station_id" not in rows[0]

    @pytest.mark.asyncio
    async def test_recent_events_include_events_without_peak(self, db_session: AsyncSession):
        rows = await event_crud.station_recent_events(db_session, station_id="A002", limit=20)

        assert [row["id"] for row in rows][:2] == [5, 4]
        assert {row["id"] for row in rows} == {4, 5, 6}

    @pytest.mark.asyncio
    async def test_repeated_queries_are_identical(self, db_session: AsyncSession):
        first = await event_crud.station_matched_events_detail(db_session, station_id="A001")
        second = await event_crud.station_matched_events_detail(db_session, station_id="A001")

        assert first == second


class TestBasinScope:
    """Queries over every station of a basin."""

    @pytest.mark.asyncio
    async def test_summary(self, db_session: AsyncSession):
        summary = await event_crud.basin_summary(db_session, basin_name="Tone")

        assert summary == {
            "total_events": 6,
            "first_start_time": "2019-12-01 00:00:00",
            "last_end_time": "2021-07-10 09:00:00",
            "min_peak_time": "2020-03-01 00:00:00",
            "max_peak_time": "2021-07-10 03:00:00",
        }

    @pytest.mark.asyncio
    async def test_basin_name_is_exact(self, db_session: AsyncSession):
        lower = await event_crud.basin_summary(db_session, basin_name="tone")
        partial = await event_crud.basin_filtered_summary(db_session, basin_name="Ton")

        assert lower["total_events"] == 0
        assert partial == EMPTY_STATS

    @pytest.mark.asyncio
    async def test_filtered_summary(self, db_session: AsyncSession):
        stats = await event_crud.basin_filtered_summary(
            db_session, basin_name="Tone", event_filter=SPRING_2020
        )

        assert stats["matched_events"] == 4
        assert stats["max_peak_value"] == 5.0
        assert stats["avg_peak_value"] == pytest.approx(8.5 / 3)
        assert stats["avg_rise_time"] == pytest.approx(3.5)
        assert stats["avg_fall_time"] == pytest.approx(4.25)

    @pytest.mark.asyncio
    async def test_other_basins_are_excluded(self, db_session: AsyncSession):
        stats = await event_crud.basin_filtered_summary(db_session, basin_name="Shinano")

        assert stats["matched_events"] == 1
        assert stats["max_peak_value"] == 9.0

    @pytest.mark.asyncio
    async def test_matched_series(self, db_session: AsyncSession):
        series = await event_crud.basin_matched_series(
            db_session, basin_name="Tone", event_filter=SPRING_2020
        )

        assert [point["id"] for point in series] == [1, 5, 2]

    @pytest.mark.asyncio
    async def test_matched_events_detail(self, db_session: AsyncSession):
        rows = await event_crud.basin_matched_events_detail(
            db_session, basin_name="Tone", event_filter=SPRING_2020
        )

        assert [row["id"] for row in rows] == [1, 4, 5, 2]
        assert {row["basin_name"] for row in rows} == {"Tone"}
        assert {row["station_id"] for row in rows} == {"A001", "A002"}

    @pytest.mark.asyncio
    async def test_generic_scope_matches_wrappers(self, db_session: AsyncSession):
        via_scope = await event_crud.filtered_summary(db_session, BasinScope("Tone"), SPRING_2020)
        via_wrapper = await event_crud.basin_filtered_summary(
            db_session, basin_name="Tone", event_filter=SPRING_2020
        )
        station = await event_crud.summary(db_session, StationScope("B001"))

        assert via_scope == via_wrapper
        assert station["total_events"] == 1
