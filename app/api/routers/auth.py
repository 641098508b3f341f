# app/api/routers/auth.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.config import get_db
from app.core.security import create_access_token, get_current_identity
from app.services.session_state import session_registry, set_user
from app.services.user_auth import user_auth_service
from app.schemas.user_auth import (
    Identity,
    LoginRequest,
    SignupRequest,
    TokenResponse,
    SuccessResponse,
)

router = APIRouter(prefix="/auth", tags=["User Authentication"])


def _start_session(identity: Identity) -> TokenResponse:
    session_registry.update(identity, set_user, identity)
    return TokenResponse(
        access_token=create_access_token(data={"sub": str(identity.id)}),
        user=identity,
    )


# =====================================================================
# PUBLIC ENDPOINTS - No authentication required
# =====================================================================

@router.post(
    "/signup",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an account"
)
def signup(data: SignupRequest, db: Session = Depends(get_db)):
    """
    Register a new account and sign in.

    - **email**: Valid email address
    - **password**: At least 6 characters
    - **display_name**: Name shown in the app

    Fails with `email-in-use` or `weak-password`.
    """
    identity = user_auth_service.signup(db, data)
    return _start_session(identity)


@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login to get access token"
)
def login(data: LoginRequest, db: Session = Depends(get_db)):
    """
    Authenticate with email and password.

    Fails with `invalid-credential` for an unknown email or wrong password.
    """
    identity = user_auth_service.login(db, data)
    return _start_session(identity)


# =====================================================================
# USER ENDPOINTS - Authentication required
# =====================================================================

@router.post("/logout", response_model=SuccessResponse)
def logout(identity: Identity = Depends(get_current_identity)):
    """Discard the in-progress session. The client drops its token."""
    user_auth_service.logout(identity)
    return SuccessResponse(message="Logged out")


@router.get("/me", response_model=Identity)
def me(identity: Identity = Depends(get_current_identity)):
    """Get the authenticated user's identity."""
    return identity
