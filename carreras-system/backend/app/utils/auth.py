import secrets
import time

import bcrypt

from app.config import settings

# In-memory session store: token -> {"usuario_id", "email", "created_at"}.
# Sessions do not survive a restart; users simply log in again.
_sessions: dict[str, dict] = {}


def hash_password(password: str) -> str:
    """Hash a password using bcrypt."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash in the database
        return False


def create_session(usuario_id: int, email: str) -> str:
    """Open a session for the user and return its token."""
    token = secrets.token_urlsafe(32)
    _sessions[token] = {
        "usuario_id": usuario_id,
        "email": email,
        "created_at": time.time(),
    }
    return token


def validate_session(token: str) -> dict | None:
    """Return the session data, or None if unknown or older than SESSION_MAX_AGE."""
    session = _sessions.get(token)
    if session is None:
        return None
    if time.time() - session["created_at"] > settings.SESSION_MAX_AGE:
        _sessions.pop(token, None)
        return None
    return session


def destroy_session(token: str) -> None:
    _sessions.pop(token, None)
