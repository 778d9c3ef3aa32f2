# =====================================================
# test/alembic/test_migrations.py
# =====================================================
from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine, inspect

PROJECT_ROOT = Path(__file__).parent.parent.parent


@pytest.fixture
def alembic_config(tmp_path, monkeypatch):
    """Config senza alembic.ini: il logging dei test non viene riconfigurato"""
    db_path = tmp_path / "migrations.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_path}")

    cfg = Config()
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "alembic"))
    return cfg, f"sqlite:///{db_path}"


class TestRevisions:

    def test_single_head(self, alembic_config):
        cfg, _ = alembic_config
        script = ScriptDirectory.from_config(cfg)

        revisions = list(script.walk_revisions())
        assert [rev.revision for rev in revisions] == ["001"]
        assert script.get_heads() == ["001"]


class TestUpgrade:

    def test_upgrade_creates_tables(self, alembic_config):
        cfg, url = alembic_config
        command.upgrade(cfg, "head")

        engine = create_engine(url)
        inspector = inspect(engine)
        assert {"users", "sectors", "readings"} <= set(inspector.get_table_names())

        unique = {uc["name"] for uc in inspector.get_unique_constraints("readings")}
        assert "uq_readings_sector_day_shift" in unique
        engine.dispose()

    def test_downgrade_removes_tables(self, alembic_config):
        cfg, url = alembic_config
        command.upgrade(cfg, "head")
        command.downgrade(cfg, "base")

        engine = create_engine(url)
        assert set(inspect(engine).get_table_names()) <= {"alembic_version"}
        engine.dispose()
