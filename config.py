# config.py
import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class Settings(BaseModel):
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./member.db")

    # 실 서비스에서는 반드시 .env 로 교체
    JWT_ACCESS_SECRET: str = os.getenv("JWT_ACCESS_SECRET", "CHANGE_ME_ACCESS_SECRET")
    JWT_REFRESH_SECRET: str = os.getenv("JWT_REFRESH_SECRET", "CHANGE_ME_REFRESH_SECRET")
    JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "30"))
    REFRESH_TOKEN_EXPIRE_HOURS: int = int(os.getenv("REFRESH_TOKEN_EXPIRE_HOURS", "12"))

    # 쿠키 수명 (초 단위, 기본 12시간)
    AUTH_COOKIE_MAX_AGE: int = int(os.getenv("AUTH_COOKIE_MAX_AGE", str(3600 * 12)))
    COOKIE_SECURE: bool = os.getenv("COOKIE_SECURE", "false").lower() == "true"
    COOKIE_SAMESITE: Optional[str] = os.getenv("COOKIE_SAMESITE") or None

    CORS_ORIGINS: List[str] = [
        o.strip()
        for o in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
        if o.strip()
    ]

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")


settings = Settings()
