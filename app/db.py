from sqlalchemy import MetaData, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.pool import StaticPool


def is_sqlite(database_url: str) -> bool:
    return database_url.startswith("sqlite")


def create_db_engine(database_url: str, echo: bool = False) -> Engine:
    """DB URL로 엔진 생성 (SQLite 메모리 DB는 커넥션 하나를 공유)"""
    kwargs = {"echo": echo}

    if is_sqlite(database_url):
        # FastAPI 워커 스레드에서도 같은 커넥션을 사용할 수 있도록
        kwargs["connect_args"] = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True

    return create_engine(database_url, **kwargs)


def tracked_tables_only(metadata: MetaData):
    """
    alembic autogenerate용 include_object

    metadata에 없는 테이블(AUTOINCREMENT가 만드는 sqlite_sequence 등)은
    비교 대상에서 제외해 drop_table이 생성되지 않도록 한다.
    """
    def include_object(obj, name, type_, reflected, compare_to):
        if type_ == "table":
            return name in metadata.tables
        return True

    return include_object
