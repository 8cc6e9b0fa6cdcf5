# core/deps.py
"""
FastAPI dependencies for the session and the current user.
"""
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db import get_session
from db_models.user import User
from core.session_gate import AuthService, Session, SessionGate

# OAuth2 scheme for token extraction from Authorization header
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)

# Browser clients may carry the access token in a cookie instead
ACCESS_TOKEN_COOKIE = "access_token"


class AuthenticationError(HTTPException):
    """Raised when authentication fails."""
    def __init__(self, detail: str = "Could not validate credentials"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


def get_auth_service(request: Request) -> AuthService:
    """The AuthService stored on the application in ``main.py``."""
    return request.app.state.auth_service


def get_request_token(
    request: Request,
    token: Annotated[str | None, Depends(oauth2_scheme)],
) -> str | None:
    """Bearer token from the Authorization header, falling back to the cookie."""
    if token:
        return token
    return request.cookies.get(ACCESS_TOKEN_COOKIE)


async def get_current_session(
    token: Annotated[str | None, Depends(get_request_token)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
) -> Session:
    if token is None:
        raise AuthenticationError("Not authenticated")
    session = auth.get_session(token)
    if session is None:
        raise AuthenticationError("Invalid or expired token")
    return session


async def get_current_user(
    session: Annotated[Session, Depends(get_current_session)],
    db: AsyncSession = Depends(get_session),
) -> User:
    """
    The user behind the current session.

    Raises:
        AuthenticationError: If the user no longer exists or is disabled
    """
    stmt = select(User).where(User.id == session.user_id)
    result = await db.execute(stmt)
    user = result.scalar_one_or_none()

    if user is None:
        raise AuthenticationError("User not found")

    if not user.is_active:
        raise AuthenticationError("User account is disabled")

    return user


def get_session_gate(
    token: Annotated[str | None, Depends(get_request_token)],
    auth: Annotated[AuthService, Depends(get_auth_service)],
):
    """A mounted SessionGate for this request; unsubscribed once the response is sent."""
    with SessionGate(auth).mount(token) as gate:
        yield gate


# Type aliases for cleaner endpoint signatures
Auth = Annotated[AuthService, Depends(get_auth_service)]
RequestToken = Annotated[str | None, Depends(get_request_token)]
CurrentSession = Annotated[Session, Depends(get_current_session)]
CurrentUser = Annotated[User, Depends(get_current_user)]
Gate = Annotated[SessionGate, Depends(get_session_gate)]
