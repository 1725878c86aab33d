# forum/core/config.py

import os

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from forum.utils.times import value_to_seconds

# 프로젝트의 루트 디렉토리 경로를 계산합니다.
BASE_DIR = os.path.dirname(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))


class Settings(BaseSettings):
    """
    애플리케이션의 모든 설정을 정의하는 Pydantic BaseSettings 모델입니다.
    환경 변수 및 .env 파일에서 값을 자동으로 로드합니다.
    """

    # --- Pydantic Settings 설정 ---
    model_config = SettingsConfigDict(
        env_file=os.path.join(BASE_DIR, '.env'),  # 프로젝트 루트의 .env 파일
        env_file_encoding='utf-8',
        extra='ignore',                      # 모델에 없는 변수는 무시
        case_sensitive=True                  # 환경 변수 이름 대소문자 구분
    )

    # --- 애플리케이션 기본 설정 ---
    APP_NAME: str = "Trapziu Forum API"
    APP_DESCRIPTION: str = "CRUD forum backend: users, profiles, posts, likes and comments."
    LOG_LEVEL: str = Field("INFO", description="Root log level (DEBUG, INFO, WARNING, ERROR)")
    BACKEND_PORT: int = Field(8000, description="Port the API server binds to")
    DEBUG_MODE: bool = Field(False, description="Echo SQL statements and enable verbose errors")
    REQUEST_TIMEOUT_SECONDS: int = Field(30, gt=0, description="Per-request processing timeout")

    # 응답의 createdAt 등을 UTC 기준 동쪽으로 몇 시간 이동해 표시할지
    TZ_EAST_OFFSET_IN_HOURS: int = Field(0, ge=-12, le=14, description="Display timezone offset east of UTC")

    # --- 데이터베이스 설정 ---
    DATABASE_URL: SecretStr = Field(..., description="Async SQLAlchemy database URL")
    DB_AUTO_CREATE: bool = Field(False, description="Create tables on startup (development only)")

    # --- JWT (JSON Web Token) 설정 ---
    JWT_SECRET: SecretStr = Field(..., description="Secret key for JWT token signing. Keep this highly secure!")
    JWT_ALGORITHM: str = Field("HS256", description="Algorithm used for JWT signing")
    JWT_EXPIRATION_VALUE: int = Field(7, gt=0, description="Token lifetime, counted in JWT_EXPIRATION_UNIT")
    JWT_EXPIRATION_UNIT: str = Field("days", description="seconds, minutes, hours, days, weeks, months or years")

    # --- ARQ (Redis) 설정 ---
    REDIS_HOST: str = Field("localhost", description="Redis host for the arq worker")
    REDIS_PORT: int = Field(6379, description="Redis port for the arq worker")
    HISTORY_RETENTION_DAYS: int = Field(90, gt=0, description="Days of viewing history kept by the prune task")

    @field_validator("JWT_EXPIRATION_UNIT")
    @classmethod
    def check_expiration_unit(cls, v: str) -> str:
        value_to_seconds(1, v)  # 알 수 없는 단위면 ValueError
        return v.lower()

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        return v.upper()

    @property
    def JWT_EXPIRATION_SECONDS(self) -> int:
        return value_to_seconds(self.JWT_EXPIRATION_VALUE, self.JWT_EXPIRATION_UNIT)


settings = Settings()
