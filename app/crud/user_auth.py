# crud/user_auth.py
from typing import Optional
from uuid import UUID
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from passlib.context import CryptContext

from app.models.user_auth import UserAuth

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class UserAuthCRUD:
    """CRUD operations for UserAuth model."""

    # =====================================================================
    # HELPER METHODS
    # =====================================================================

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash a password."""
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """Verify a password against its hash."""
        return pwd_context.verify(plain_password, hashed_password)

    # =====================================================================
    # CREATE OPERATIONS
    # =====================================================================

    def create(
        self, db: Session, *, email: str, password: str, display_name: Optional[str] = None
    ) -> UserAuth:
        """Create a new user with a hashed password."""
        db_obj = UserAuth(
            email=email.lower(),
            display_name=display_name,
            password_hash=self.hash_password(password),
        )

        db.add(db_obj)
        db.commit()
        db.refresh(db_obj)
        return db_obj

    # =====================================================================
    # READ OPERATIONS
    # =====================================================================

    def get(self, db: Session, *, id: UUID) -> Optional[UserAuth]:
        """Get user by ID."""
        return db.query(UserAuth).filter(UserAuth.id == id).first()

    def get_by_email(self, db: Session, *, email: str) -> Optional[UserAuth]:
        """Get user by email (case-insensitive)."""
        return db.query(UserAuth).filter(UserAuth.email == email.lower()).first()

    # =====================================================================
    # UPDATE OPERATIONS
    # =====================================================================

    def touch_login(self, db: Session, *, db_obj: UserAuth) -> UserAuth:
        """Record a successful login."""
        db_obj.last_login_at = datetime.now(timezone.utc)
        db.commit()
        db.refresh(db_obj)
        return db_obj


crud_user_auth = UserAuthCRUD()
