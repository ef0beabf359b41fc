from typing import Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DB_HOST: str = "localhost"
    DB_PORT: int = 3306
    DB_USER: str = "root"
    DB_PASSWORD: str = ""
    DB_NAME: str = "pawwalk"
    DB_URL: Optional[str] = None          # 지정 시 DB_* 조합 대신 그대로 사용 (sqlite 등)

    # 커넥션 풀 (요청마다 풀에서 빌려 씀)
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30

    FIREBASE_CREDENTIALS: str = "firebase-service-account.json"

    GOOGLE_MAPS_API_KEY: Optional[str] = None
    GEOCODING_TIMEOUT: float = 5.0
    GEOCODING_CACHE_SIZE: int = 1024
    GEOCODING_FAILURE_COOLDOWN: float = 30.0   # 외부 호출 실패 후 재시도까지 대기 (초)

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"     # 프로젝트 루트에 있는 .env 자동 로딩

    @property
    def DATABASE_URL(self) -> str:
        """SQLAlchemy에서 사용할 DB 연결 URL 생성"""
        if self.DB_URL:
            return self.DB_URL
        return (
            f"mysql+pymysql://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )


# settings 객체를 import하면 바로 사용할 수 있음
settings = Settings()


def get_settings() -> Settings:
    return settings
