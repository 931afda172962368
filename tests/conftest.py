"""
Shared test fixtures.

A small hydrology database is written once per session to a temporary SQLite
file. Repository tests query it through an async session; API tests run the
application with ``get_db`` overridden to use the same file.
"""

import os
import tempfile

# Settings are read at import time, so the environment must be ready first
_TMP_DIR = tempfile.mkdtemp(prefix="hydrology-tests-")
os.environ.setdefault("LOG_DIR", os.path.join(_TMP_DIR, "logs"))
os.environ.setdefault("HYDROLOGY_DB_PATH", os.path.join(_TMP_DIR, "unused.db"))
os.environ.setdefault("RATE_LIMIT_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import NullPool

from app.database import Base, get_db
from app.models import Station, StationRecord


STATIONS = [
    dict(station_id="A001", latitude=36.39, longitude=139.06, basin_name="Tone",
         river_name="Tone River", station_name="Maebashi", station_name2="前橋",
         has_data=1),
    dict(station_id="A002", latitude=36.32, longitude=139.00, basin_name="Tone",
         river_name="Karasu", station_name="Takasaki", has_data=1),
    dict(station_id="B001", latitude=36.65, longitude=138.18, basin_name="Shinano",
         river_name="Chikuma", station_name="Nagano", has_data=1),
    dict(station_id="C001", latitude=None, longitude=None, basin_name="Tone",
         river_name="Agatsuma", station_name="Naganohara", has_data=0),
    dict(station_id="C002", latitude=35.38, longitude=136.94, basin_name="Kiso",
         river_name="Kiso", station_name="Inuyama", station_name3="犬山", has_data=0),
]

RECORDS = [
    # A001: peaks 1.0 / 5.0 / 3.0, two of them on the edges of a day
    dict(id=1, station_id="A001", start_time="2020-02-28 20:00:00", peak_time="2020-03-01 00:00:00",
         end_time="2020-03-01 06:00:00", start_value=0.2, peak_value=1.0, end_value=0.3,
         rise_time=4.0, fall_time=6.0, peak_time_str="2020/03/01 00:00"),
    dict(id=2, station_id="A001", start_time="2020-05-31 18:00:00", peak_time="2020-05-31 23:59:59",
         end_time="2020-06-01 04:00:00", start_value=0.5, peak_value=5.0, end_value=0.8,
         rise_time=6.0, fall_time=4.0, peak_time_str="2020/05/31 23:59"),
    dict(id=3, station_id="A001", start_time="2021-07-10 01:00:00", peak_time="2021-07-10 03:00:00",
         end_time="2021-07-10 09:00:00", start_value=0.4, peak_value=3.0, end_value=0.6,
         rise_time=2.0, fall_time=6.0, peak_time_str="2021/07/10 03:00"),
    # A002: one event without a peak value, one without a peak time
    dict(id=4, station_id="A002", start_time="2020-04-15 10:00:00", peak_time="2020-04-15 12:00:00",
         end_time="2020-04-15 20:00:00", start_value=0.1, peak_value=None, end_value=0.2,
         rise_time=1.0, fall_time=2.0, peak_time_str="2020/04/15 12:00"),
    dict(id=5, station_id="A002", start_time="2020-04-20 05:00:00", peak_time="2020-04-20 08:00:00",
         end_time="2020-04-20 13:00:00", start_value=0.3, peak_value=2.5, end_value=0.4,
         rise_time=3.0, fall_time=5.0, peak_time_str="2020/04/20 08:00"),
    dict(id=6, station_id="A002", start_time="2019-12-01 00:00:00", peak_time=None,
         end_time=None, start_value=0.1, peak_value=7.0, end_value=None,
         rise_time=None, fall_time=None, peak_time_str=None),
    # B001
    dict(id=7, station_id="B001", start_time="2020-04-01 06:00:00", peak_time="2020-04-01 09:00:00",
         end_time="2020-04-01 12:00:00", start_value=1.0, peak_value=9.0, end_value=1.5,
         rise_time=3.0, fall_time=3.0, peak_time_str="2020/04/01 09:00"),
]


@pytest.fixture(scope="session")
def db_path(tmp_path_factory):
    """Path of the seeded hydrology database."""
    path = tmp_path_factory.mktemp("data") / "hydrology_data.db"
    engine = create_engine(f"sqlite:///{path}")
    Base.metadata.create_all(engine)
    with Session(engine) as session:
        session.add_all(Station(**row) for row in STATIONS)
        session.flush()
        session.add_all(StationRecord(**row) for row in RECORDS)
        session.commit()
    engine.dispose()
    return path


@pytest.fixture
def database_url(db_path):
    """Read-only async URL of the seeded database."""
    return f"sqlite+aiosqlite:///file:{db_path}?mode=ro&uri=true"


@pytest.fixture
def session_factory(database_url):
    """Session factory bound to the seeded database."""
    # NullPool: connections must not outlive the event loop that opened them
    engine = create_async_engine(database_url, poolclass=NullPool)
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
async def db_session(session_factory):
    """Async session for repository tests."""
    async with session_factory() as session:
        yield session


def _override_with(factory):
    async def _get_db():
        async with factory() as session:
            yield session
    return _get_db


@pytest.fixture
def client(session_factory):
    """Test client with the seeded database."""
    from app.main import app

    app.dependency_overrides[get_db] = _override_with(session_factory)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def broken_client(tmp_path):
    """Test client whose database cannot be opened."""
    from app.main import app

    missing = tmp_path / "missing" / "hydrology_data.db"
    engine = create_async_engine(
        f"sqlite+aiosqlite:///file:{missing}?mode=ro&uri=true", poolclass=NullPool
    )
    factory = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    app.dependency_overrides[get_db] = _override_with(factory)
    yield TestClient(app)
    app.dependency_overrides.clear()
