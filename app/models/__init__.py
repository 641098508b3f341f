# app/models/__init__.py

from app.core.config import Base

# Import all models here so create_all and app-wide imports work
from .user_auth import UserAuth
from .pain_report import PainReport

__all__ = [
    "Base",
    "UserAuth",
    "PainReport",
]
