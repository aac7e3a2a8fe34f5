"""
반려동물 전체 삭제 스크립트

사용법:
    python scripts/delete_all_pets.py [--yes]
"""
import sys
import os

# 프로젝트 루트를 Python path에 추가
sys.path.insert(0, os.path.abspath(os.path.dirname(os.path.dirname(__file__))))

from app.core.config import settings
from app.core.notifier import ChangeNotifier
from app.domains.pets.repository.pet_repository import PetStore
from app.domains.pets.routes import content_uri
from app.domains.pets.service.pet_provider import PetProvider


def delete_all_pets(provider: PetProvider, confirm: bool = False) -> int:
    """모든 반려동물 삭제, 삭제된 row 수 반환 (취소하면 -1)"""
    uri = content_uri(provider.authority)

    with provider.query(uri) as rows:
        count = rows.get_count()

    if count == 0:
        print("[OK] 삭제할 반려동물이 없습니다.")
        return 0

    if not confirm:
        print(f"[경고] 반려동물 {count}마리를 삭제하려고 합니다.")
        print("정말 삭제하시겠습니까? (yes/no): ", end="")
        response = input().strip().lower()
        if response not in ["yes", "y"]:
            print("[취소] 취소되었습니다.")
            return -1

    deleted = provider.delete(uri)
    print(f"[성공] {deleted}마리의 반려동물이 삭제되었습니다!")
    return deleted


if __name__ == "__main__":
    store = PetStore(settings.DATABASE_URL)
    provider = PetProvider(store, ChangeNotifier(), settings.CONTENT_AUTHORITY)
    try:
        result = delete_all_pets(provider, confirm="--yes" in sys.argv[1:])
    finally:
        store.close()

    sys.exit(0 if result >= 0 else 1)
