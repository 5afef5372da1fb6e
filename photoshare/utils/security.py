"""Security utilities: password hashing and signed session tokens."""

from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from photoshare.config import settings


# --- Password Hashing ---

def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def verify_password(password: str, hashed: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode(), hashed.encode())
    except ValueError:
        # Malformed stored hash
        return False


# --- Session Tokens ---

def create_session_token(user_id: int) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.session_expire_minutes)
    payload = {
        "sub": str(user_id),
        "exp": expire,
        "type": "session",
    }
    return jwt.encode(payload, settings.session_secret, algorithm=settings.session_algorithm)


def decode_session_token(token: str) -> dict:
    """Decode and validate a session token. Raises jwt.PyJWTError on failure."""
    return jwt.decode(token, settings.session_secret, algorithms=[settings.session_algorithm])
