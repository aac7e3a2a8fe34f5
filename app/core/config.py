from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./shelter.db"
    CONTENT_AUTHORITY: str = "com.example.android.pets"
    DB_ECHO: bool = False
    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"     # 프로젝트 루트에 있는 .env 자동 로딩

    @property
    def CONTENT_URI(self) -> str:
        """pets 테이블 전체를 가리키는 content URI"""
        return f"content://{self.CONTENT_AUTHORITY}/pets"

# settings 객체를 import하면 바로 사용할 수 있음
settings = Settings()
