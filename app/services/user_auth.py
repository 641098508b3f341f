# services/user_auth.py
import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.exceptions import (
    EmailInUseError,
    InvalidCredentialError,
    WeakPasswordError,
)
from app.crud.user_auth import crud_user_auth
from app.models.user_auth import UserAuth
from app.schemas.user_auth import Identity, LoginRequest, SignupRequest
from app.services.session_state import session_registry

logger = logging.getLogger(__name__)


# =====================================================================
# SERVICE CLASS
# =====================================================================


class UserAuthService:
    """Service layer for sign-up, login and logout."""

    def __init__(self):
        self.crud = crud_user_auth

    # =====================================================================
    # REGISTRATION
    # =====================================================================

    def signup(self, db: Session, data: SignupRequest) -> Identity:
        """
        Create an account and return its identity.

        Raises:
            WeakPasswordError: If the password is too short
            EmailInUseError: If the email is already registered
        """
        if len(data.password) < settings.MIN_PASSWORD_LENGTH:
            raise WeakPasswordError()

        if self.crud.get_by_email(db, email=data.email):
            raise EmailInUseError()

        try:
            user = self.crud.create(
                db,
                email=data.email,
                password=data.password,
                display_name=data.display_name,
            )
        except IntegrityError as e:
            db.rollback()
            raise EmailInUseError() from e

        logger.info(f"Registered user {user.id}")
        return Identity.model_validate(user)

    # =====================================================================
    # AUTHENTICATION & LOGIN
    # =====================================================================

    def authenticate(self, db: Session, data: LoginRequest) -> UserAuth:
        """
        Check email and password.

        Raises:
            InvalidCredentialError: Unknown email or wrong password
        """
        user = self.crud.get_by_email(db, email=data.email)
        if not user or not self.crud.verify_password(data.password, user.password_hash):
            raise InvalidCredentialError()

        return self.crud.touch_login(db, db_obj=user)

    def login(self, db: Session, data: LoginRequest) -> Identity:
        return Identity.model_validate(self.authenticate(db, data))

    def logout(self, identity: Identity) -> None:
        """Forget the user's in-progress session."""
        session_registry.drop(identity.id)
        logger.info(f"User {identity.id} logged out")


user_auth_service = UserAuthService()
