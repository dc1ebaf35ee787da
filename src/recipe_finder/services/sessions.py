"""Session manager for authenticated users."""

import logging
import secrets
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta

from recipe_finder.domain.errors import AuthenticationError
from recipe_finder.domain.models import PublicUser, UserRecord
from recipe_finder.domain.sessions import AuthSession
from recipe_finder.services.users import UserService

_logger = logging.getLogger(__name__)


@dataclass
class SessionManager:
    """Keeps login sessions in process memory, keyed by an opaque token."""

    user_service: UserService
    ttl: timedelta = timedelta(days=7)
    _sessions: dict[str, AuthSession] = field(default_factory=dict)

    def register(self, data: dict[str, object]) -> AuthSession:
        """Register a user and log them in."""
        user = self.user_service.register(data)
        return self._open(user)

    def login(self, email: str, password: str) -> AuthSession:
        """Log a user in with email and password."""
        user = self.user_service.authenticate(email, password)
        _logger.info("User %s logged in", user.id)
        return self._open(user)

    def logout(self, token: str | None) -> None:
        """Forget a session; unknown tokens are ignored."""
        if token:
            self._sessions.pop(token, None)

    def get_session(self, token: str | None) -> AuthSession | None:
        """Return the live session for a token."""
        if not token:
            return None
        session = self._sessions.get(token)
        if session is None:
            return None
        if session.expires_at <= datetime.now(tz=UTC):
            self._sessions.pop(token, None)
            return None
        return session

    def current_user(self, token: str | None) -> PublicUser | None:
        """Return the user behind a token, if the session is live."""
        session = self.get_session(token)
        return session.user if session else None

    def is_authenticated(self, token: str | None) -> bool:
        """Return True when the token maps to a live session."""
        return self.get_session(token) is not None

    def update_profile(self, token: str, updates: dict[str, object]) -> PublicUser:
        """Update the session user's profile and refresh the session."""
        session = self._require(token)
        user = self.user_service.update_profile(session.user.id, updates)
        public = PublicUser.from_record(user)
        self._sessions[token] = replace(session, user=public)
        return public

    def change_password(
        self, token: str, current_password: str, new_password: str
    ) -> None:
        """Change the session user's password."""
        session = self._require(token)
        self.user_service.change_password(
            session.user.id, current_password, new_password
        )

    def _open(self, user: UserRecord) -> AuthSession:
        now = datetime.now(tz=UTC)
        self._sweep_expired(now)
        session = AuthSession(
            token=secrets.token_urlsafe(32),
            user=PublicUser.from_record(user),
            expires_at=now + self.ttl,
        )
        self._sessions[session.token] = session
        return session

    def _sweep_expired(self, now: datetime) -> None:
        expired = [
            token
            for token, session in self._sessions.items()
            if session.expires_at <= now
        ]
        for token in expired:
            del self._sessions[token]
        if expired:
            _logger.debug("Dropped %s expired sessions", len(expired))

    def _require(self, token: str) -> AuthSession:
        session = self.get_session(token)
        if session is None:
            raise AuthenticationError("Not logged in")
        return session
