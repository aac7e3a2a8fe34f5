import logging
from typing import Any, Dict, Mapping, Optional, Sequence

from app.core.config import settings
from app.core.notifier import ChangeNotifier
from app.models.pet import (
    COLUMN_ID,
    COLUMN_PET_GENDER,
    COLUMN_PET_NAME,
    COLUMN_PET_WEIGHT,
    is_valid_gender,
)
from app.domains.pets.exception import (
    PetValidationError,
    UnknownRouteError,
    UnsupportedRouteError,
)
from app.domains.pets.repository.pet_repository import PetStore
from app.domains.pets.repository.row_set import RowSet
from app.domains.pets.routes import (
    CollectionRoute,
    ItemRoute,
    content_item_type,
    content_list_type,
    parse_route,
    with_appended_id,
)

logger = logging.getLogger(__name__)

ITEM_SELECTION = f"{COLUMN_ID}=?"


def as_integer(value: Any) -> Optional[int]:
    """정수로 해석 가능한 값이면 int, 아니면 None"""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def validate_pet_values(values: Mapping[str, Any], partial: bool = False) -> Dict[str, Any]:
    """
    name / gender / weight 검증 후 정규화된 field-set 반환

    - partial=False (insert): name, gender 필수
    - partial=True (update): 들어온 key만 검사
    """
    cleaned = dict(values)

    if COLUMN_ID in cleaned:
        raise PetValidationError("PET_400_4", "Pet id is assigned by the store and cannot be set")

    if not partial or COLUMN_PET_NAME in cleaned:
        name = cleaned.get(COLUMN_PET_NAME)
        # 문자열이 아닌 값(숫자 등)은 문자열로 변환해서 저장
        if name is not None and not isinstance(name, str):
            name = str(name)
            cleaned[COLUMN_PET_NAME] = name
        if name is None or not name.strip():
            raise PetValidationError("PET_400_1", "Pet requires a name")

    if not partial or COLUMN_PET_GENDER in cleaned:
        gender = as_integer(cleaned.get(COLUMN_PET_GENDER))
        if gender is None or not is_valid_gender(gender):
            raise PetValidationError("PET_400_2", "Pet requires valid gender")
        cleaned[COLUMN_PET_GENDER] = gender

    if COLUMN_PET_WEIGHT in cleaned and cleaned[COLUMN_PET_WEIGHT] is not None:
        weight = as_integer(cleaned[COLUMN_PET_WEIGHT])
        if weight is None or weight < 0:
            raise PetValidationError("PET_400_3", "Pet requires valid weight")
        cleaned[COLUMN_PET_WEIGHT] = weight

    # breed는 어떤 값이든 허용 (null 포함)
    return cleaned


class PetProvider:
    """
    pets content URI 요청을 라우팅하고 검증한 뒤 PetStore에 위임한다.
    쓰기가 성공하면 ChangeNotifier로 해당 URI 변경을 알린다.
    """

    def __init__(self, store: PetStore, notifier: ChangeNotifier, authority: str = None):
        self.store = store
        self.notifier = notifier
        self.authority = authority or settings.CONTENT_AUTHORITY

    def _match(self, uri: str, message: str):
        try:
            return parse_route(uri, self.authority)
        except UnsupportedRouteError:
            logger.warning("%s %s", message, uri)
            raise UnsupportedRouteError(f"{message} {uri}") from None

    # ============================================================
    # query
    # ============================================================
    def query(
        self,
        uri: str,
        projection: Optional[Sequence[str]] = None,
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
        sort_order: Optional[str] = None,
    ) -> RowSet:
        route = self._match(uri, "Cannot query unknown URI")

        if isinstance(route, ItemRoute):
            # 단일 항목 조회는 호출자가 준 selection을 무시하고 id로만 조회
            selection = ITEM_SELECTION
            selection_args = [route.pet_id]

        rows = self.store.query(projection, selection, selection_args, sort_order)

        # 이 URI의 데이터가 바뀌면 결과를 갱신해야 함을 알 수 있도록 바인딩
        rows.set_notification_uri(self.notifier, uri)
        return rows

    # ============================================================
    # insert
    # ============================================================
    def insert(self, uri: str, values: Mapping[str, Any]) -> Optional[str]:
        route = self._match(uri, "Insertion is not supported for")
        if not isinstance(route, CollectionRoute):
            logger.warning("Insertion is not supported for %s", uri)
            raise UnsupportedRouteError(f"Insertion is not supported for {uri}")

        return self._insert_pet(uri, values)

    def _insert_pet(self, uri: str, values: Mapping[str, Any]) -> Optional[str]:
        cleaned = validate_pet_values(values)

        pet_id = self.store.insert(cleaned)
        if pet_id == -1:
            logger.error("Failed to insert row for %s", uri)
            return None

        self.notifier.notify_change(uri)
        return with_appended_id(uri, pet_id)

    # ============================================================
    # update
    # ============================================================
    def update(
        self,
        uri: str,
        values: Mapping[str, Any],
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
    ) -> int:
        route = self._match(uri, "Update is not supported for")

        if isinstance(route, ItemRoute):
            selection = ITEM_SELECTION
            selection_args = [route.pet_id]

        return self._update_pet(uri, values, selection, selection_args)

    def _update_pet(self, uri, values, selection, selection_args) -> int:
        cleaned = validate_pet_values(values or {}, partial=True)

        # 수정할 값이 없으면 DB에 접근하지 않음
        if not cleaned:
            return 0

        rows_updated = self.store.update(cleaned, selection, selection_args)
        if rows_updated != 0:
            self.notifier.notify_change(uri)
        return rows_updated

    # ============================================================
    # delete
    # ============================================================
    def delete(
        self,
        uri: str,
        selection: Optional[str] = None,
        selection_args: Optional[Sequence[Any]] = None,
    ) -> int:
        route = self._match(uri, "Deletion is not supported for")

        if isinstance(route, ItemRoute):
            selection = ITEM_SELECTION
            selection_args = [route.pet_id]

        rows_deleted = self.store.delete(selection, selection_args)

        # 컬렉션/단일 항목 모두 1개 이상 삭제된 경우에만 알림
        if rows_deleted != 0:
            self.notifier.notify_change(uri)
        return rows_deleted

    # ============================================================
    # type
    # ============================================================
    def get_type(self, uri: str) -> str:
        try:
            route = parse_route(uri, self.authority)
        except UnsupportedRouteError:
            raise UnknownRouteError(f"Unknown URI {uri}") from None

        if isinstance(route, CollectionRoute):
            return content_list_type(self.authority)
        return content_item_type(self.authority)
