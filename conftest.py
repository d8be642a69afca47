import pytest

from src.app import config as app_config
from src.storage import database


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Point storage at a fresh SQLite file with the schema applied."""
    db_path = tmp_path / "mockdata_test.db"
    monkeypatch.setattr(app_config, "DB_PATH", str(db_path))
    database.init_db()
    return db_path


@pytest.fixture()
def sample_rows():
    return [
        {"id": 1, "name": "John", "age": 30},
        {"id": 2, "name": "Jane", "age": 25},
    ]


@pytest.fixture()
def sample_fields():
    return ["id", "name", "age"]
