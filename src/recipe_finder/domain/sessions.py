"""Domain models for login sessions."""

from dataclasses import dataclass
from datetime import datetime

from recipe_finder.domain.models import PublicUser


@dataclass(frozen=True)
class AuthSession:
    """An authenticated session held by the server."""

    token: str
    user: PublicUser
    expires_at: datetime
