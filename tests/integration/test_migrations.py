"""
Alembic migrations produce the same schema the models declare
"""
from pathlib import Path

import sqlalchemy as sa
from alembic import command
from alembic.config import Config

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def alembic_config(database_url):
    cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    cfg.set_main_option("sqlalchemy.url", database_url)
    cfg.attributes["configure_logger"] = False
    return cfg


def test_upgrade_to_head_creates_all_tables(tmp_path):
    db_path = tmp_path / "migrated.db"
    command.upgrade(alembic_config(f"sqlite+aiosqlite:///{db_path}"), "head")

    engine = sa.create_engine(f"sqlite:///{db_path}")
    try:
        inspector = sa.inspect(engine)
        tables = set(inspector.get_table_names())
        assert {"trips", "days", "plans", "expenses", "flights", "hotels", "app_meta"} <= tables

        flight_columns = {column["name"] for column in inspector.get_columns("flights")}
        assert {"leg_type", "leg_order", "from_airport", "to_airport"} <= flight_columns
    finally:
        engine.dispose()


def test_downgrade_removes_leg_columns(tmp_path):
    db_path = tmp_path / "migrated.db"
    cfg = alembic_config(f"sqlite+aiosqlite:///{db_path}")
    command.upgrade(cfg, "head")
    command.downgrade(cfg, "-1")

    engine = sa.create_engine(f"sqlite:///{db_path}")
    try:
        flight_columns = {column["name"] for column in sa.inspect(engine).get_columns("flights")}
        assert "leg_type" not in flight_columns
        assert "from_code" in flight_columns
    finally:
        engine.dispose()
