#!/usr/bin/env python3
"""
Schema bootstrap script.
Creates any missing tables for the configured database and lists the tables found.
"""
import argparse
import asyncio
import sys
from typing import List, Optional

from sqlalchemy import inspect

from trip_planner.config.loader import load_config_for_environment
from trip_planner.core.db import create_engine, create_schema


async def apply_schema(database_url: Optional[str] = None, environment: Optional[str] = None) -> List[str]:
    """Create missing tables and return the table names present afterwards."""
    settings = load_config_for_environment(environment)
    database = settings.database
    if database_url:
        database = database.model_copy(update={"url": database_url})

    engine = create_engine(database)
    try:
        await create_schema(engine)
        async with engine.connect() as conn:
            tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
    finally:
        await engine.dispose()
    return sorted(tables)


def main():
    parser = argparse.ArgumentParser(description="Create the trip planner tables")
    parser.add_argument("--env", default=None, help="Environment whose configuration to use")
    parser.add_argument("--database-url", default=None, help="Database URL (overrides config)")
    args = parser.parse_args()

    try:
        tables = asyncio.run(apply_schema(args.database_url, args.env))
    except ValueError as e:
        print(f"Invalid configuration: {e}")
        sys.exit(1)

    print("Schema applied. Tables:")
    for table in tables:
        print(f"  - {table}")


if __name__ == "__main__":
    main()
