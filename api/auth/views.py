# api/auth/views.py
"""
Sign-in, sign-out and session endpoints.
"""
import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.security import OAuth2PasswordRequestForm
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from db_models.user import User
from core.deps import (
    ACCESS_TOKEN_COOKIE,
    Auth,
    CurrentUser,
    Gate,
    RequestToken,
)
from core.session_gate import (
    AuthService,
    AuthRejectedError,
    AuthStatus,
    Session,
    GENERIC_SIGN_IN_ERROR,
)
from .models import (
    Token,
    TokenRefresh,
    LoginRequest,
    UserResponse,
    SessionResponse,
    MessageResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


def _token_response(session: Session, response: Response) -> Token:
    # Browser page routes read the access token from this cookie
    response.set_cookie(
        ACCESS_TOKEN_COOKIE,
        session.access_token,
        httponly=True,
        samesite="lax",
    )
    return Token(
        access_token=session.access_token,
        refresh_token=session.refresh_token,
    )


async def _sign_in(auth: AuthService, db: AsyncSession, email: str, password: str) -> Session:
    """Credential rejections keep their message; anything else becomes a generic retry message."""
    try:
        return await auth.sign_in(db, email, password)
    except AuthRejectedError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc
    except Exception as exc:
        logger.exception("Login error for %s", email)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=GENERIC_SIGN_IN_ERROR,
        ) from exc


@router.post("/login", response_model=Token, summary="Login and get tokens")
async def login(
    response: Response,
    auth: Auth,
    form_data: OAuth2PasswordRequestForm = Depends(),
    db: AsyncSession = Depends(get_session),
) -> Token:
    """
    OAuth2 compatible login endpoint (the username field carries the email).
    Returns access and refresh tokens and sets the access token cookie.
    """
    session = await _sign_in(auth, db, form_data.username, form_data.password)
    return _token_response(session, response)


@router.post("/login/json", response_model=Token, summary="Login with JSON body")
async def login_json(
    credentials: LoginRequest,
    response: Response,
    auth: Auth,
    db: AsyncSession = Depends(get_session),
) -> Token:
    """Login endpoint accepting a JSON body, for SPA clients."""
    session = await _sign_in(auth, db, credentials.email, credentials.password)
    return _token_response(session, response)


@router.post("/refresh", response_model=Token, summary="Refresh access token")
async def refresh_token(
    request: TokenRefresh,
    response: Response,
    auth: Auth,
    db: AsyncSession = Depends(get_session),
) -> Token:
    """Get a new token pair for the same session using a refresh token."""
    try:
        session = await auth.refresh(db, request.refresh_token)
    except AuthRejectedError as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
        ) from exc
    return _token_response(session, response)


@router.post("/logout", response_model=MessageResponse, summary="Sign out")
async def logout(
    response: Response,
    auth: Auth,
    token: RequestToken,
) -> MessageResponse:
    """End the current session. Signing out without a valid session is not an error."""
    auth.sign_out(token)
    response.delete_cookie(ACCESS_TOKEN_COOKIE)
    return MessageResponse(message="Signed out")


@router.get("/session", response_model=SessionResponse, summary="Current session state")
async def get_session_state(
    gate: Gate,
    db: AsyncSession = Depends(get_session),
) -> SessionResponse:
    """Whether the caller holds a live session, and whose it is."""
    user = None
    if gate.is_authenticated:
        stmt = select(User).where(User.id == gate.session.user_id, User.is_active.is_(True))
        result = await db.execute(stmt)
        user = result.scalar_one_or_none()

    authenticated = user is not None
    return SessionResponse(
        authenticated=authenticated,
        status=(AuthStatus.AUTHENTICATED if authenticated else AuthStatus.UNAUTHENTICATED).value,
        user=UserResponse.model_validate(user) if user is not None else None,
    )


@router.get("/me", response_model=UserResponse, summary="Get current user")
async def get_me(current_user: CurrentUser) -> UserResponse:
    """Get the current authenticated user's profile."""
    return UserResponse.model_validate(current_user)
