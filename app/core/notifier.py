import logging
import threading
from dataclasses import dataclass, field
from itertools import count
from typing import Callable, Dict, List
from urllib.parse import urlsplit

logger = logging.getLogger(__name__)

ChangeCallback = Callable[[str], None]


def _uri_key(uri: str) -> List[str]:
    parts = urlsplit(uri)
    return [parts.scheme, parts.netloc] + [s for s in parts.path.split("/") if s]


@dataclass
class ObserverHandle:
    handle_id: int
    uri: str
    callback: ChangeCallback = field(repr=False)
    notify_for_descendants: bool = False

    def wants(self, changed_uri: str) -> bool:
        """changed_uri 변경을 이 observer에게 전달해야 하는지"""
        mine = _uri_key(self.uri)
        changed = _uri_key(changed_uri)

        if mine == changed:
            return True
        # 변경된 URI가 내 하위 URI
        if changed[:len(mine)] == mine:
            return self.notify_for_descendants
        # 변경된 URI가 내 상위 URI (컬렉션 변경은 항목 observer에게도 전달)
        return mine[:len(changed)] == changed


class ChangeNotifier:
    """content URI 단위의 변경 알림 (observer 등록 / 해제 / 발행)"""

    def __init__(self):
        self._observers: Dict[int, ObserverHandle] = {}
        self._ids = count(1)
        self._lock = threading.Lock()

    def register_observer(
        self,
        uri: str,
        callback: ChangeCallback,
        notify_for_descendants: bool = False,
    ) -> ObserverHandle:
        handle = ObserverHandle(
            handle_id=next(self._ids),
            uri=uri,
            callback=callback,
            notify_for_descendants=notify_for_descendants,
        )
        with self._lock:
            self._observers[handle.handle_id] = handle
        return handle

    def unregister_observer(self, handle: ObserverHandle) -> bool:
        with self._lock:
            return self._observers.pop(handle.handle_id, None) is not None

    def observer_count(self) -> int:
        return len(self._observers)

    def notify_change(self, uri: str) -> int:
        """uri 변경을 관심 있는 observer에게 전달하고, 호출된 observer 수를 반환"""
        with self._lock:
            targets = [h for h in self._observers.values() if h.wants(uri)]

        logger.debug("notify_change %s -> %d observer(s)", uri, len(targets))

        for handle in targets:
            try:
                handle.callback(uri)
            except Exception:
                # observer 하나가 실패해도 나머지에는 계속 전달
                logger.exception("Observer %s failed for %s", handle.handle_id, uri)

        return len(targets)
