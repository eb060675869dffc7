from .connection import AsyncDatabaseEngine, create_engine_for_url, ensure_schema, get_db

__all__ = ["AsyncDatabaseEngine", "create_engine_for_url", "ensure_schema", "get_db"]
