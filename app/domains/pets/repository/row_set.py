import weakref
from typing import Callable, Dict, Iterator, List, Optional, Sequence

from app.core.notifier import ChangeNotifier, ObserverHandle


class RowSet:
    """query 결과 (컬럼 + row) 와 변경 알림 URI 바인딩"""

    def __init__(self, columns: Sequence[str], rows: Sequence[Sequence]):
        self.columns: List[str] = list(columns)
        self.rows: List[tuple] = [tuple(row) for row in rows]

        self.notification_uri: Optional[str] = None
        self.is_stale = False
        self._handle: Optional[ObserverHandle] = None
        self._release: Optional[weakref.finalize] = None
        self._listeners: List[Callable[[str], None]] = []

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[Dict]:
        for row in self.rows:
            yield dict(zip(self.columns, row))

    def get_count(self) -> int:
        return len(self.rows)

    def get_column_index(self, column: str) -> int:
        try:
            return self.columns.index(column)
        except ValueError:
            return -1

    def first(self) -> Optional[Dict]:
        if not self.rows:
            return None
        return dict(zip(self.columns, self.rows[0]))

    def as_dicts(self) -> List[Dict]:
        return list(self)

    # -------------------------------
    # 변경 알림
    # -------------------------------
    def set_notification_uri(self, notifier: ChangeNotifier, uri: str) -> None:
        """uri(및 하위 URI) 데이터가 바뀌면 이 결과를 stale로 표시"""
        self._unregister()
        self.notification_uri = uri

        # notifier는 RowSet을 약하게만 참조: close() 없이 버려진 결과도 GC 시 observer 해제
        on_change = weakref.WeakMethod(self._on_change)

        def _callback(changed_uri: str) -> None:
            method = on_change()
            if method is not None:
                method(changed_uri)

        self._handle = notifier.register_observer(uri, _callback, notify_for_descendants=True)
        self._release = weakref.finalize(self, notifier.unregister_observer, self._handle)

    def add_change_listener(self, listener: Callable[[str], None]) -> None:
        self._listeners.append(listener)

    def _on_change(self, uri: str) -> None:
        self.is_stale = True
        for listener in list(self._listeners):
            listener(uri)

    def _unregister(self) -> None:
        if self._release is not None:
            # finalize는 한 번만 실행되고 이후 GC 시에는 다시 호출되지 않음
            self._release()
        self._release = None
        self._handle = None

    def close(self) -> None:
        self._unregister()
        self._listeners.clear()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
