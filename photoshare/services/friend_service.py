"""Friend requests and friendships."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, or_, select

from photoshare.models.friendship import (
    ACCEPTED,
    DECLINED,
    PENDING,
    Friendship,
    make_pair_key,
)

logger = logging.getLogger(__name__)

RESPONSE_STATUSES = (ACCEPTED, DECLINED)


def get_friendship(friendship_id: int, session: Session) -> Friendship | None:
    return session.get(Friendship, friendship_id)


def get_friendship_between(user_a: int, user_b: int, session: Session) -> Friendship | None:
    """The friendship row for an unordered pair, whichever side requested it."""
    return session.exec(
        select(Friendship).where(Friendship.pair_key == make_pair_key(user_a, user_b))
    ).first()


def create_friend_request(requester_id: int, addressee_id: int, session: Session) -> Friendship:
    """Create a pending request. Raises ValueError for self or duplicate requests."""
    if requester_id == addressee_id:
        raise ValueError("You cannot send a friend request to yourself")
    if get_friendship_between(requester_id, addressee_id, session):
        raise ValueError("Friend request already exists")

    friendship = Friendship(
        requester_id=requester_id,
        addressee_id=addressee_id,
        status=PENDING,
        pair_key=make_pair_key(requester_id, addressee_id),
    )
    session.add(friendship)
    try:
        session.commit()
    except IntegrityError:
        # The other user sent a request at the same moment
        session.rollback()
        raise ValueError("Friend request already exists")
    session.refresh(friendship)
    logger.info("Friend request %s: %s -> %s", friendship.id, requester_id, addressee_id)
    return friendship


def respond_to_friend_request(
    friendship: Friendship, status: str, session: Session
) -> Friendship:
    """Move a pending request to accepted or declined."""
    if status not in RESPONSE_STATUSES:
        raise ValueError("Invalid status. Must be 'accepted' or 'declined'")
    if friendship.status != PENDING:
        raise ValueError("Friend request has already been answered")

    friendship.status = status
    session.add(friendship)
    session.commit()
    session.refresh(friendship)
    return friendship


def list_friend_requests(user_id: int, session: Session) -> list[Friendship]:
    """Pending requests addressed to the user, newest first."""
    return list(session.exec(
        select(Friendship)
        .where(Friendship.addressee_id == user_id, Friendship.status == PENDING)
        .order_by(col(Friendship.created_at).desc(), col(Friendship.id).desc())
    ).all())


def list_friendships(user_id: int, session: Session) -> list[Friendship]:
    """Accepted friendships on either side of the user."""
    return list(session.exec(
        select(Friendship)
        .where(
            or_(Friendship.requester_id == user_id, Friendship.addressee_id == user_id),
            Friendship.status == ACCEPTED,
        )
        .order_by(col(Friendship.id))
    ).all())
