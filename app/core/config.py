from typing import Generator, List
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from pydantic_settings import BaseSettings


# =====================================================================
# SETTINGS
# =====================================================================


class Settings(BaseSettings):
    # App
    APP_NAME: str = "PainTrack API"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Database
    DATABASE_URL: str = "sqlite:///./paintrack.db"

    # JWT
    SECRET_KEY: str = "Supersecretkey"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60

    # Auth
    MIN_PASSWORD_LENGTH: int = 6

    # Notifications
    NOTIFICATIONS_ENABLED: bool = True

    # Analytics
    MAX_DAILY_HOURS: float = 24
    HIGH_PAIN_THRESHOLD: int = 7
    CHRONIC_LOOKBACK_DAYS: int = 35
    CHRONIC_MIN_REPORTS: int = 4
    CHRONIC_MIN_SPAN_DAYS: int = 25
    WEEKLY_WINDOW: int = 7
    MONTHLY_WINDOW: int = 30

    # CORS
    CORS_ORIGINS: List[str] = [
        "http://localhost:5173",
        "http://localhost:3000",
        "http://127.0.0.1:5173",
        "http://127.0.0.1:3000",
    ]

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()


# =====================================================================
# DATABASE
# =====================================================================

engine = create_engine(
    settings.DATABASE_URL,
    connect_args=(
        {"check_same_thread": False} if "sqlite" in settings.DATABASE_URL else {}
    ),
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
Base = declarative_base()


def get_db() -> Generator[Session, None, None]:
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
