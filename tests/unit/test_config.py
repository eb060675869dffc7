import pytest

from querystudy.common.config import build_database_url, is_sqlite_url


@pytest.mark.unit
class TestBuildDatabaseUrl:
    def test_url_override(self):
        assert build_database_url({"url": "sqlite+aiosqlite://"}) == "sqlite+aiosqlite://"

    def test_postgres_url(self):
        config = {
            "url": None,
            "host": "db",
            "port": "5432",
            "user": "study",
            "password": "secret",
            "database": "querystudy",
        }

        assert build_database_url(config) == "postgresql+asyncpg://study:secret@db:5432/querystudy"

    def test_postgres_url_without_password(self):
        config = {"host": "db", "port": "5432", "user": "study", "database": "querystudy"}

        assert build_database_url(config) == "postgresql+asyncpg://study@db:5432/querystudy"

    def test_missing_keys(self):
        with pytest.raises(ValueError, match="host"):
            build_database_url({"port": "5432", "user": "study", "database": "querystudy"})

    def test_is_sqlite_url(self):
        assert is_sqlite_url("sqlite+aiosqlite:///:memory:")
        assert not is_sqlite_url("postgresql+asyncpg://db/querystudy")
