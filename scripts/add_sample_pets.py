"""
반려동물 샘플 데이터 추가 스크립트

사용법:
    python scripts/add_sample_pets.py [개수]

예시:
    python scripts/add_sample_pets.py 3
    # Toto (Terrier, Male, 7kg) 를 3마리 추가
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
from app.models.pet import GENDER_MALE

DUMMY_PET = {
    "name": "Toto",
    "breed": "Terrier",
    "gender": GENDER_MALE,
    "weight": 7,
}


def add_sample_pets(provider: PetProvider, count: int = 1):
    """샘플 반려동물 count 마리 추가, 생성된 URI 목록 반환"""
    uris = []
    for _ in range(count):
        new_uri = provider.insert(content_uri(provider.authority), DUMMY_PET)
        if new_uri is None:
            print("[오류] 반려동물 추가에 실패했습니다.")
            continue
        uris.append(new_uri)
    return uris


if __name__ == "__main__":
    try:
        count = int(sys.argv[1]) if len(sys.argv) > 1 else 1
    except ValueError:
        print("[오류] 개수는 숫자여야 합니다.")
        sys.exit(1)

    store = PetStore(settings.DATABASE_URL)
    provider = PetProvider(store, ChangeNotifier(), settings.CONTENT_AUTHORITY)
    try:
        created = add_sample_pets(provider, count)
        for uri in created:
            print(f"[성공] {uri}")
    finally:
        store.close()

    sys.exit(0 if created else 1)
