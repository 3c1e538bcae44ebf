"""Token Store — the client's signed-in session (token + current user).

Invariants:
    - is_signed_in is False once the token expired, even before the server says so
    - clear() forgets everything (used on sign-out and on any 401)
"""

from dataclasses import dataclass
from datetime import datetime, timezone

from cleancrud.schemas.auth import CurrentUser, TokenResponse


@dataclass
class TokenStore:
    token: str | None = None
    expires_at: datetime | None = None
    user: CurrentUser | None = None

    @property
    def is_signed_in(self) -> bool:
        if not self.token:
            return False
        if self.expires_at is None:
            return True
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return datetime.now(timezone.utc) < expires_at

    def save(self, token: TokenResponse) -> None:
        self.token = token.access_token
        self.expires_at = token.expires_at
        self.user = None

    def clear(self) -> None:
        self.token = None
        self.expires_at = None
        self.user = None
