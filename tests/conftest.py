"""
pytest 설정: 메모리 SQLite 위의 store / provider / API client
"""
import pytest
from fastapi.testclient import TestClient

from app.core.notifier import ChangeNotifier
from app.domains.pets.repository.pet_repository import PetStore
from app.domains.pets.routes import content_uri
from app.domains.pets.service.pet_provider import PetProvider

AUTHORITY = "com.example.android.pets"
PETS_URI = f"content://{AUTHORITY}/pets"


@pytest.fixture
def store():
    """테스트마다 새 메모리 DB"""
    store = PetStore("sqlite://")
    yield store
    store.close()


@pytest.fixture
def notifier():
    return ChangeNotifier()


@pytest.fixture
def provider(store, notifier):
    return PetProvider(store, notifier, AUTHORITY)


@pytest.fixture
def changes(notifier):
    """컬렉션 URI(및 하위 URI) 변경 알림 기록"""
    received = []
    notifier.register_observer(content_uri(AUTHORITY), received.append, notify_for_descendants=True)
    return received


@pytest.fixture
def rex():
    return {"name": "Rex", "breed": "Lab", "gender": 1, "weight": 10}


@pytest.fixture
def client(provider):
    """FastAPI 테스트 클라이언트 (provider 주입)"""
    from app.main import create_app
    app = create_app(provider)
    return TestClient(app)
