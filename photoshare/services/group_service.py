"""Groups and group membership."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from photoshare.models.group import Group, GroupMember

logger = logging.getLogger(__name__)


def create_group(name: str, description: str | None, created_by: int, session: Session) -> Group:
    """Create a group; the creator becomes its first member."""
    group = Group(name=name.strip(), description=description or None, created_by=created_by)
    session.add(group)
    session.flush()
    session.add(GroupMember(group_id=group.id, user_id=created_by))
    session.commit()
    session.refresh(group)
    logger.info("User %s created group %s", created_by, group.id)
    return group


def get_group(group_id: int, session: Session) -> Group | None:
    return session.get(Group, group_id)


def list_user_groups(user_id: int, session: Session) -> list[Group]:
    member_group_ids = select(GroupMember.group_id).where(GroupMember.user_id == user_id)
    return list(session.exec(
        select(Group).where(col(Group.id).in_(member_group_ids)).order_by(col(Group.id))
    ).all())


def list_group_member_ids(group_id: int, session: Session) -> list[int]:
    return list(session.exec(
        select(GroupMember.user_id)
        .where(GroupMember.group_id == group_id)
        .order_by(col(GroupMember.joined_at), col(GroupMember.id))
    ).all())


def get_membership(group_id: int, user_id: int, session: Session) -> GroupMember | None:
    return session.exec(
        select(GroupMember).where(
            GroupMember.group_id == group_id,
            GroupMember.user_id == user_id,
        )
    ).first()


def add_group_member(group_id: int, user_id: int, session: Session) -> GroupMember:
    """Add a user to a group. Raises ValueError if already a member."""
    if get_membership(group_id, user_id, session):
        raise ValueError("User is already a member of this group")
    member = GroupMember(group_id=group_id, user_id=user_id)
    session.add(member)
    try:
        session.commit()
    except IntegrityError:
        session.rollback()
        raise ValueError("User is already a member of this group")
    session.refresh(member)
    return member


def remove_group_member(membership: GroupMember, session: Session) -> None:
    group_id, user_id = membership.group_id, membership.user_id
    session.delete(membership)
    session.commit()
    logger.info("Removed user %s from group %s", user_id, group_id)
