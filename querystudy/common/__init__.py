from .config import DB_CONFIG, TEST_DATABASE_URL, build_database_url

__all__ = ["DB_CONFIG", "TEST_DATABASE_URL", "build_database_url"]
