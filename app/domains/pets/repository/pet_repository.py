import logging
import threading
from typing import Any, Dict, Optional, Sequence

from sqlalchemy import delete, insert, select, text, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from app.db import create_db_engine
from app.models import Base
from app.models.pet import Pet
from app.domains.pets.repository.row_set import RowSet

logger = logging.getLogger(__name__)

pets_table = Pet.__table__


def bind_selection(selection: str, selection_args: Optional[Sequence[Any]]):
    """'?' 자리표시자를 selection_args 값으로 순서대로 바인딩한 WHERE 절 생성"""
    args = list(selection_args or [])
    params: Dict[str, Any] = {}
    out = []
    quote = None

    for ch in selection:
        if quote:
            # 문자열 리터럴 안의 '?'는 그대로 둔다
            if ch == quote:
                quote = None
            out.append(ch)
        elif ch in ("'", '"'):
            quote = ch
            out.append(ch)
        elif ch == "?":
            index = len(params)
            if index >= len(args):
                raise ValueError(f"Too few bind arguments for selection: {selection}")
            params[f"arg{index}"] = args[index]
            out.append(f":arg{index}")
        else:
            out.append(ch)

    if len(params) != len(args):
        raise ValueError(
            f"Expected {len(params)} bind arguments for selection, got {len(args)}"
        )

    return text("".join(out)).bindparams(**params)


class PetStore:
    """pets 테이블 하나를 다루는 저장소 (처음 접근할 때 DB를 연다)"""

    def __init__(self, database_url: str = None, engine: Engine = None, echo: bool = False):
        if database_url is None and engine is None:
            raise ValueError("PetStore needs a database_url or an engine")

        self.database_url = database_url
        self.echo = echo
        self._engine = engine
        self._session_factory: Optional[sessionmaker] = None
        self._lock = threading.Lock()

    # -------------------------------
    # DB handle
    # -------------------------------
    def _open(self) -> sessionmaker:
        with self._lock:
            if self._session_factory is None:
                if self._engine is None:
                    self._engine = create_db_engine(self.database_url, echo=self.echo)
                # 최초 접근 시 스키마 생성
                Base.metadata.create_all(self._engine)
                self._session_factory = sessionmaker(
                    autocommit=False,
                    autoflush=False,
                    bind=self._engine
                )
                logger.info("Opened pet database %s", self._engine.url)
            return self._session_factory

    @property
    def is_open(self) -> bool:
        return self._session_factory is not None

    def get_readable_database(self) -> Session:
        return self._open()()

    def get_writable_database(self) -> Session:
        return self._open()()

    def close(self) -> None:
        with self._lock:
            if self._engine is not None:
                self._engine.dispose()
            self._session_factory = None

    # -------------------------------
    # PET: CRUD
    # -------------------------------
    def query(
        self,
        projection: Optional[Sequence[str]] = None,
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
        sort_order: Optional[str] = None,
    ) -> RowSet:
        if projection:
            unknown = [name for name in projection if name not in pets_table.c]
            if unknown:
                raise ValueError(f"no such column: {', '.join(unknown)}")
            columns = [pets_table.c[name] for name in projection]
        else:
            columns = list(pets_table.c)

        stmt = select(*columns)
        if selection:
            stmt = stmt.where(bind_selection(selection, selection_args))
        if sort_order:
            stmt = stmt.order_by(text(sort_order))

        with self.get_readable_database() as db:
            result = db.execute(stmt)
            return RowSet(list(result.keys()), result.fetchall())

    def insert(self, values: Dict[str, Any]) -> int:
        """새 row의 id 반환, 실패하면 -1"""
        try:
            with self.get_writable_database() as db:
                result = db.execute(insert(pets_table).values(**values))
                db.commit()
                return result.inserted_primary_key[0]
        except SQLAlchemyError as e:
            logger.error("Error inserting %s: %s", values, e)
            return -1

    def update(
        self,
        values: Dict[str, Any],
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
    ) -> int:
        stmt = update(pets_table).values(**values)
        if selection:
            stmt = stmt.where(bind_selection(selection, selection_args))

        with self.get_writable_database() as db:
            result = db.execute(stmt)
            db.commit()
            return result.rowcount

    def delete(
        self,
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
    ) -> int:
        stmt = delete(pets_table)
        if selection:
            stmt = stmt.where(bind_selection(selection, selection_args))

        with self.get_writable_database() as db:
            result = db.execute(stmt)
            db.commit()
            return result.rowcount
