"""
Inspect the hydrology database layout.

Lists every table of the SQLite file together with its columns, as reported
by ``PRAGMA table_info``. The file is opened read-only.

Usage:
    python -m scripts.inspect_db
    python -m scripts.inspect_db --db /data/hydrology_data.db
"""

import argparse
import asyncio
import sys
from pathlib import Path
from typing import Dict, List

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine

from app.config import settings


def read_only_url(db_path: str) -> str:
    """SQLAlchemy URL opening ``db_path`` in read-only mode."""
    return f"sqlite+aiosqlite:///file:{db_path}?mode=ro&uri=true"


async def describe_database(database_url: str) -> Dict[str, List[dict]]:
    """
    Collect the column layout of every table.

    Args:
        database_url: SQLAlchemy async URL of the database

    Returns:
        Mapping of table name to its columns (name, type, notnull, default, pk)
    """
    engine = create_async_engine(database_url)
    layout: Dict[str, List[dict]] = {}
    try:
        async with engine.connect() as conn:
            tables = await conn.execute(
                text("SELECT name FROM sqlite_master WHERE type='table' ORDER BY name")
            )
            for (table_name,) in tables.all():
                columns = await conn.execute(text(f'PRAGMA table_info("{table_name}")'))
                layout[table_name] = [
                    {
                        "name": row.name,
                        "type": row.type,
                        "notnull": bool(row.notnull),
                        "default": row.dflt_value,
                        "pk": bool(row.pk),
                    }
                    for row in columns
                ]
    finally:
        await engine.dispose()
    return layout


def print_layout(layout: Dict[str, List[dict]]) -> None:
    print(f"Tables: {', '.join(layout) or '(none)'}")
    for table_name, columns in layout.items():
        print()
        print(f"Schema for {table_name}:")
        print("=" * 60)
        for column in columns:
            flags = []
            if column["pk"]:
                flags.append("PK")
            if column["notnull"]:
                flags.append("NOT NULL")
            if column["default"] is not None:
                flags.append(f"DEFAULT {column['default']}")
            print(f"Column: {column['name']}, Type: {column['type']} {' '.join(flags)}".rstrip())


def main():
    """Command-line entry point."""
    parser = argparse.ArgumentParser(
        description="List tables and columns of the hydrology database"
    )
    parser.add_argument(
        '--db',
        type=str,
        default=settings.HYDROLOGY_DB_PATH,
        help=f'Path to the SQLite file (default: {settings.HYDROLOGY_DB_PATH})'
    )

    args = parser.parse_args()

    if not Path(args.db).is_file():
        parser.error(f"database file not found: {args.db}")

    print_layout(asyncio.run(describe_database(read_only_url(args.db))))


if __name__ == "__main__":
    main()
