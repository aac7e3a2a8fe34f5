import os
import sys
from logging.config import fileConfig

from alembic import context

# ---------------------------------------------------------
# ★ 프로젝트 루트를 path에 추가 (app 패키지 import용)
# ---------------------------------------------------------
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.core.config import settings
from app.db import create_db_engine, is_sqlite, tracked_tables_only
from app.models import Base

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# pets 테이블만 추적
target_metadata = Base.metadata


def get_url() -> str:
    """`alembic -x db_url=...` 로 넘긴 URL 우선, 없으면 앱 settings의 DATABASE_URL"""
    return context.get_x_argument(as_dictionary=True).get("db_url", settings.DATABASE_URL)


def configure_options(url: str) -> dict:
    return {
        "target_metadata": target_metadata,
        # SQLite는 ALTER TABLE 지원이 제한적이라 batch 모드로 migration
        "render_as_batch": is_sqlite(url),
        "compare_type": True,
        "include_object": tracked_tables_only(target_metadata),
    }


# ---------------------------------------------------------
# offline 모드 (SQL 출력만)
# ---------------------------------------------------------
def run_migrations_offline():
    url = get_url()
    context.configure(
        url=url,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
        **configure_options(url),
    )

    with context.begin_transaction():
        context.run_migrations()


# ---------------------------------------------------------
# online 모드 (앱과 같은 엔진 설정으로 연결 후 migration)
# ---------------------------------------------------------
def run_migrations_online():
    url = get_url()
    engine = create_db_engine(url, echo=settings.DB_ECHO)

    try:
        with engine.connect() as connection:
            context.configure(connection=connection, **configure_options(url))

            with context.begin_transaction():
                context.run_migrations()
    finally:
        engine.dispose()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
