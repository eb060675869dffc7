"""
통합 설정 모듈 (Unified Configuration)

환경변수 표준:
- DB: PG_HOST, PG_PORT, PG_USER, PG_PASSWORD, PG_DATABASE
- DB (레거시 폴백): DB_HOST, DB_PORT, DB_USER, DB_PASSWORD, DB_NAME
- DATABASE_URL: 지정 시 위 값을 무시하고 그대로 사용 (예: sqlite+aiosqlite:///:memory:)
- DB_ECHO: "1" 이면 실행되는 SQL 을 로그로 출력
"""

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# 프로젝트 루트에서 .env 로드
_project_root = Path(__file__).parent.parent.parent
_env_path = _project_root / ".env"
if _env_path.exists():
    load_dotenv(_env_path)
else:
    load_dotenv()


# =============================================================================
# Database Configuration
# =============================================================================
# 환경변수 호환성: PG_* (신규 표준) 우선, DB_* (레거시) 폴백
DB_CONFIG: dict[str, Any] = {
    "url": os.getenv("DATABASE_URL"),
    "host": os.getenv("PG_HOST") or os.getenv("DB_HOST", "localhost"),
    "port": os.getenv("PG_PORT") or os.getenv("DB_PORT", "5432"),
    "user": os.getenv("PG_USER") or os.getenv("DB_USER", "postgres"),
    "password": os.getenv("PG_PASSWORD") or os.getenv("DB_PASSWORD"),
    "database": os.getenv("PG_DATABASE") or os.getenv("DB_NAME", "querystudy"),
    "echo": os.getenv("DB_ECHO", "0") == "1",
    "pool_size": int(os.getenv("DB_POOL_SIZE", "20")),
    "max_overflow": int(os.getenv("DB_MAX_OVERFLOW", "10")),
    "pool_recycle": int(os.getenv("DB_POOL_RECYCLE", "3600")),
}

# 테스트는 기본적으로 인메모리 SQLite 를 사용한다.
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite://")


def build_database_url(config: dict[str, Any] | None = None) -> str:
    """
    DB 설정으로부터 비동기 연결 URL을 생성합니다.

    Args:
        config: DB 설정. 생략하면 DB_CONFIG 사용.

    Returns:
        SQLAlchemy 비동기 URL 문자열

    Raises:
        ValueError: url 도 없고 필수 접속 키도 빠진 경우
    """
    config = config or DB_CONFIG
    if config.get("url"):
        return config["url"]

    required_keys = {"host", "port", "user", "database"}
    missing = {key for key in required_keys if not config.get(key)}
    if missing:
        raise ValueError(f"Missing DB config keys: {sorted(missing)}")

    password = config.get("password") or ""
    credentials = f"{config['user']}:{password}" if password else config["user"]
    return f"postgresql+asyncpg://{credentials}@{config['host']}:{config['port']}/{config['database']}"


def is_sqlite_url(url: str) -> bool:
    return url.startswith("sqlite")
