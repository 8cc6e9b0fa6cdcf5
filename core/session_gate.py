# core/session_gate.py
"""
Session handling: the auth service boundary and the gate built on top of it.

``AuthService`` issues, reads, refreshes and revokes sessions and notifies
subscribers whenever a session changes. One instance is created at app
start-up and handed to request handlers through ``core.deps``.

``SessionGate`` observes the service for a single caller. It fetches the
current session once on mount, listens for changes to that caller's session,
and turns the result into a tri-state ``AuthStatus`` that decides which view a
path resolves to.
"""
import logging
import uuid
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum

from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from db_models.user import User
from core.security import (
    REFRESH_TOKEN_EXPIRE_DAYS,
    verify_password,
    create_access_token,
    create_refresh_token,
    verify_token_type,
)

logger = logging.getLogger(__name__)

REVOCATION_TTL = timedelta(days=REFRESH_TOKEN_EXPIRE_DAYS)

INVALID_CREDENTIALS = "Incorrect email or password"
ACCOUNT_DISABLED = "User account is disabled"
GENERIC_SIGN_IN_ERROR = "An unexpected error occurred. Please try again."


class AuthStatus(str, Enum):
    UNKNOWN = "unknown"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


class SessionEvent(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"


class AuthRejectedError(Exception):
    """Raised when credentials or a refresh token are rejected. The message is user-facing."""
    pass


@dataclass(frozen=True)
class Session:
    """An issued session: the tokens plus the identity claims they carry."""
    session_id: str
    user_id: int
    email: str
    access_token: str
    refresh_token: str | None = None


@dataclass(frozen=True)
class SessionChange:
    event: SessionEvent
    session_id: str
    user_id: int
    session: Session | None


SessionListener = Callable[[SessionChange], None]


class Subscription:
    """Handle returned by ``AuthService.on_session_change``."""

    def __init__(self, listeners: list[SessionListener], callback: SessionListener):
        self._listeners = listeners
        self._callback = callback
        self._listeners.append(callback)

    @property
    def active(self) -> bool:
        return self._callback in self._listeners

    def unsubscribe(self) -> None:
        # Safe to call more than once
        if self._callback in self._listeners:
            self._listeners.remove(self._callback)

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.unsubscribe()


class AuthService:
    """
    Session issuing and observation.

    Tokens are stateless JWTs; sign-out revokes the session id in memory.
    A revocation is kept until every token of that session has expired on its
    own, then dropped.
    """

    def __init__(self) -> None:
        self._listeners: list[SessionListener] = []
        # session id -> time after which no token of that session is valid
        self._revoked: dict[str, datetime] = {}

    def _prune_revoked(self) -> None:
        now = datetime.now(timezone.utc)
        for sid in [sid for sid, until in self._revoked.items() if until <= now]:
            del self._revoked[sid]

    # --- issuing ---

    def _issue(self, user_id: int, email: str, session_id: str | None = None) -> Session:
        sid = session_id or uuid.uuid4().hex
        claims = {"sub": str(user_id), "email": email, "sid": sid}
        return Session(
            session_id=sid,
            user_id=user_id,
            email=email,
            access_token=create_access_token(claims),
            refresh_token=create_refresh_token(claims),
        )

    async def sign_in(self, db: AsyncSession, email: str, password: str) -> Session:
        """
        Verify credentials and open a session.

        Raises:
            AuthRejectedError: Wrong email/password or a disabled account
        """
        stmt = select(User).where(User.email == email)
        result = await db.execute(stmt)
        user = result.scalar_one_or_none()

        if user is None or not verify_password(password, user.hashed_password):
            logger.info("Rejected sign-in for %s", email)
            raise AuthRejectedError(INVALID_CREDENTIALS)

        if not user.is_active:
            logger.info("Rejected sign-in for disabled account %s", email)
            raise AuthRejectedError(ACCOUNT_DISABLED)

        session = self._issue(user.id, user.email)
        # A failed stamp rolls back and expires ``user``; only ``session`` is read after this
        await self._touch_last_login(db, session.email)

        self._emit(SessionChange(SessionEvent.SIGNED_IN, session.session_id, session.user_id, session))
        return session

    async def refresh(self, db: AsyncSession, refresh_token: str) -> Session:
        """
        Exchange a refresh token for a new pair within the same session.

        Raises:
            AuthRejectedError: Token invalid, expired, revoked, or its user is gone
        """
        payload = verify_token_type(refresh_token, "refresh")
        if payload is None or payload.get("sid") in self._revoked:
            raise AuthRejectedError("Invalid or expired refresh token")

        try:
            user_id = int(payload.get("sub"))
        except (TypeError, ValueError):
            raise AuthRejectedError("Invalid token payload")

        stmt = select(User).where(User.id == user_id, User.is_active.is_(True))
        result = await db.execute(stmt)
        user = result.scalar_one_or_none()
        if user is None:
            raise AuthRejectedError("User not found or inactive")

        session = self._issue(user.id, user.email, session_id=payload.get("sid"))
        self._emit(SessionChange(SessionEvent.TOKEN_REFRESHED, session.session_id, user.id, session))
        return session

    async def _touch_last_login(self, db: AsyncSession, email: str) -> None:
        """Stamp ``last_login`` for the user with this email. Failures are logged, never raised."""
        stmt = (
            update(User)
            .where(User.email == email)
            .values(last_login=datetime.now(timezone.utc))
        )
        try:
            await db.execute(stmt)
            await db.commit()
        except SQLAlchemyError:
            await db.rollback()
            logger.warning("Could not update last_login for %s", email, exc_info=True)

    # --- reading ---

    def get_session(self, token: str | None) -> Session | None:
        """Return the session an access token belongs to, or None."""
        if not token:
            return None
        payload = verify_token_type(token, "access")
        if payload is None:
            return None
        sid = payload.get("sid")
        if sid is None or sid in self._revoked:
            return None
        try:
            user_id = int(payload.get("sub"))
        except (TypeError, ValueError):
            return None
        return Session(
            session_id=sid,
            user_id=user_id,
            email=payload.get("email", ""),
            access_token=token,
        )

    # --- ending ---

    def sign_out(self, token: str | None) -> None:
        """Revoke the session behind ``token``. Unknown or invalid tokens are ignored."""
        session = self.get_session(token)
        if session is None:
            return
        self._prune_revoked()
        # Refreshes stop at sign-out, so nothing for this sid outlives one refresh lifetime
        self._revoked[session.session_id] = datetime.now(timezone.utc) + REVOCATION_TTL
        logger.info("Signed out user %s", session.user_id)
        self._emit(SessionChange(SessionEvent.SIGNED_OUT, session.session_id, session.user_id, None))

    # --- observing ---

    def on_session_change(self, callback: SessionListener) -> Subscription:
        return Subscription(self._listeners, callback)

    def _emit(self, change: SessionChange) -> None:
        # Copy: listeners may unsubscribe while being notified
        for listener in list(self._listeners):
            try:
                listener(change)
            except Exception:
                logger.exception("Session listener failed on %s", change.event.value)


# Paths that require a session; everything under them is protected too.
PROTECTED_PATHS = ("/dashboard", "/assets")
LOGIN_PATH = "/login"
HOME_PATH = "/dashboard"


class SessionGate:
    """
    Per-caller view of the session state.

    Usage::

        with SessionGate(auth).mount(token) as gate:
            target = gate.resolve_route(path)
    """

    def __init__(self, auth: AuthService):
        self._auth = auth
        self._subscription: Subscription | None = None
        self.session: Session | None = None
        self.status = AuthStatus.UNKNOWN

    @property
    def is_loading(self) -> bool:
        return self.status is AuthStatus.UNKNOWN

    @property
    def is_authenticated(self) -> bool:
        return self.status is AuthStatus.AUTHENTICATED

    def mount(self, token: str | None) -> "SessionGate":
        """Subscribe to changes, then read the current session once."""
        if self._subscription is None:
            self._subscription = self._auth.on_session_change(self._on_change)
        self._apply(self._auth.get_session(token))
        return self

    def teardown(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def __enter__(self) -> "SessionGate":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()

    def _apply(self, session: Session | None) -> None:
        self.session = session
        self.status = AuthStatus.AUTHENTICATED if session is not None else AuthStatus.UNAUTHENTICATED

    def _on_change(self, change: SessionChange) -> None:
        # Only this caller's session concerns the gate
        if self.session is None or change.session_id != self.session.session_id:
            return
        self._apply(change.session)

    def resolve_route(self, path: str) -> str | None:
        """
        Redirect target for ``path``, or None when the path should render.

        While the status is unknown nothing redirects; the caller shows a
        loading indicator instead.
        """
        if path == "/":
            return LOGIN_PATH
        if self.is_loading:
            return None
        if path == LOGIN_PATH:
            return HOME_PATH if self.is_authenticated else None
        if is_protected(path) and not self.is_authenticated:
            return LOGIN_PATH
        return None


def is_protected(path: str) -> bool:
    return any(path == p or path.startswith(p + "/") for p in PROTECTED_PATHS)
