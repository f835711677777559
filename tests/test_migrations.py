# tests/test_migrations.py

from pathlib import Path

import sqlalchemy as sa
from alembic import command
from alembic.config import Config

from todolist_api.core.config import get_settings

ROOT = Path(__file__).resolve().parents[1]


def test_upgrade_creates_lists_and_tasks(tmp_path: Path, monkeypatch) -> None:
    db = tmp_path / "migrated.sqlite3"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{db}")
    # env.py reads the service settings, which are cached
    get_settings.cache_clear()

    config = Config()
    config.set_main_option("script_location", str(ROOT / "alembic"))
    try:
        command.upgrade(config, "head")
    finally:
        get_settings.cache_clear()

    engine = sa.create_engine(f"sqlite:///{db}")
    try:
        inspector = sa.inspect(engine)
        assert {"lists", "tasks", "alembic_version"} <= set(inspector.get_table_names())
        [fk] = inspector.get_foreign_keys("tasks")
        assert fk["referred_table"] == "lists"
        assert fk["constrained_columns"] == ["list_id"]
    finally:
        engine.dispose()
