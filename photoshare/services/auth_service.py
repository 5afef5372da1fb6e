"""Account registration, login and user lookup."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from photoshare.models.user import User
from photoshare.utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)


def get_user(user_id: int, session: Session) -> User | None:
    return session.get(User, user_id)


def get_user_by_username(username: str, session: Session) -> User | None:
    return session.exec(select(User).where(User.username == username)).first()


def create_user(username: str, password: str, session: Session) -> User:
    """Register a new account. Raises ValueError if the username is taken."""
    username = username.strip()
    if not username:
        raise ValueError("Username is required")
    if get_user_by_username(username, session):
        raise ValueError("Username already exists")

    user = User(username=username, password_hash=hash_password(password))
    session.add(user)
    try:
        session.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration
        session.rollback()
        raise ValueError("Username already exists")
    session.refresh(user)
    logger.info("Registered user %s (%s)", user.id, user.username)
    return user


def authenticate(username: str, password: str, session: Session) -> User | None:
    """Return the user when the credentials match, otherwise None."""
    user = get_user_by_username(username.strip(), session)
    if not user or not verify_password(password, user.password_hash):
        return None
    return user


def search_users(query: str, exclude_user_id: int, session: Session) -> list[User]:
    """Case-insensitive partial username match, excluding the caller."""
    return list(session.exec(
        select(User)
        .where(
            col(User.username).icontains(query.strip(), autoescape=True),
            User.id != exclude_user_id,
        )
        .order_by(col(User.username))
    ).all())
