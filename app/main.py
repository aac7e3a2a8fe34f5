import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI

from app.core.config import settings
from app.core.error_handler import unhandled_error_handler
from app.core.notifier import ChangeNotifier
from app.domains.pets.exception import PetProviderError, pet_error_handler
from app.domains.pets.repository.pet_repository import PetStore
from app.domains.pets.router.pet_router import router as pet_router
from app.domains.pets.service.pet_provider import PetProvider

# 로깅 설정
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # 종료 시 DB 커넥션 정리
    app.state.provider.store.close()


def create_app(provider: PetProvider = None) -> FastAPI:
    app = FastAPI(
        title="Pets API 🐾",
        version="1.0.0",
        description="Pet records (name, breed, gender, weight) backed by SQLite",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        openapi_tags=[
            {"name": "Pets", "description": "반려동물 등록/조회/수정/삭제 API"},
        ],
        lifespan=lifespan,
    )

    # 🟢 provider는 앱이 직접 생성해서 소유 (전역 DB 핸들 없음)
    if provider is None:
        store = PetStore(settings.DATABASE_URL, echo=settings.DB_ECHO)
        provider = PetProvider(store, ChangeNotifier(), settings.CONTENT_AUTHORITY)
    app.state.provider = provider

    # 🟢 라우터 등록
    app.include_router(pet_router)

    # 🟢 에러 핸들러
    app.add_exception_handler(PetProviderError, pet_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    @app.get("/")
    def root():
        return {"message": "🐾 Pets API is running successfully"}

    return app


app = create_app()

# 🟢 로컬 실행용 entry point
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True
    )
