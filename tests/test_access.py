"""Access predicate tests against the database directly."""

from datetime import datetime

import pytest
from sqlalchemy.exc import IntegrityError

from photoshare.models.friendship import PENDING, Friendship, make_pair_key
from photoshare.models.group import Group, GroupMember
from photoshare.models.image import Image, ImageShare
from photoshare.services.access_service import (
    can_remove_group_member,
    can_respond_to_friend_request,
    has_image_access,
    is_group_member,
)
from photoshare.services.friend_service import create_friend_request
from photoshare.services.group_service import create_group
from photoshare.services.image_service import create_image, month_bounds


@pytest.fixture
def owner_and_image(make_user, session):
    owner = make_user("owner")
    image = create_image(owner.id, "/uploads/a.png", None, session)
    return owner, image


def test_owner_has_access(owner_and_image, session):
    owner, image = owner_and_image
    assert has_image_access(owner.id, image.id, session)


def test_stranger_has_no_access(owner_and_image, make_user, session):
    _, image = owner_and_image
    stranger = make_user("stranger")
    assert not has_image_access(stranger.id, image.id, session)


def test_direct_share_access(owner_and_image, make_user, session):
    _, image = owner_and_image
    friend = make_user("friend")
    session.add(ImageShare(image_id=image.id, user_id=friend.id))
    session.commit()
    assert has_image_access(friend.id, image.id, session)


def test_group_share_access_requires_membership(owner_and_image, make_user, session):
    owner, image = owner_and_image
    member = make_user("member")
    outsider = make_user("outsider")
    group = create_group("G", None, owner.id, session)
    session.add(GroupMember(group_id=group.id, user_id=member.id))
    session.add(ImageShare(image_id=image.id, group_id=group.id))
    session.commit()

    assert has_image_access(member.id, image.id, session)
    assert not has_image_access(outsider.id, image.id, session)


def test_membership_in_unrelated_group_gives_no_access(owner_and_image, make_user, session):
    owner, image = owner_and_image
    member = make_user("member")
    shared = create_group("Shared", None, owner.id, session)
    other = create_group("Other", None, member.id, session)
    session.add(ImageShare(image_id=image.id, group_id=shared.id))
    session.commit()

    assert is_group_member(other.id, member.id, session)
    assert not has_image_access(member.id, image.id, session)


def test_missing_image_has_no_access(make_user, session):
    user = make_user("someone")
    assert not has_image_access(user.id, 999, session)


def test_share_needs_exactly_one_target(owner_and_image, make_user, session):
    owner, image = owner_and_image
    group = create_group("G", None, owner.id, session)
    session.add(ImageShare(image_id=image.id, user_id=owner.id, group_id=group.id))
    with pytest.raises(IntegrityError):
        session.commit()
    session.rollback()

    session.add(ImageShare(image_id=image.id))
    with pytest.raises(IntegrityError):
        session.commit()


def test_group_member_removal_rule():
    group = Group(id=1, name="G", created_by=10)
    assert can_remove_group_member(group, actor_id=20, member_id=20)
    assert can_remove_group_member(group, actor_id=10, member_id=20)
    assert can_remove_group_member(group, actor_id=10, member_id=10)
    assert not can_remove_group_member(group, actor_id=20, member_id=30)


def test_only_addressee_responds():
    friendship = Friendship(requester_id=1, addressee_id=2, status=PENDING, pair_key="1:2")
    assert can_respond_to_friend_request(friendship, 2)
    assert not can_respond_to_friend_request(friendship, 1)


def test_pair_key_is_order_independent():
    assert make_pair_key(7, 3) == make_pair_key(3, 7) == "3:7"


def test_reverse_pair_rejected_by_database(make_user, session):
    a = make_user("a")
    b = make_user("b")
    create_friend_request(a.id, b.id, session)
    with pytest.raises(ValueError):
        create_friend_request(b.id, a.id, session)

    # Bypass the service check: the unique key still holds
    session.add(Friendship(
        requester_id=b.id, addressee_id=a.id, pair_key=make_pair_key(b.id, a.id)
    ))
    with pytest.raises(IntegrityError):
        session.commit()


@pytest.mark.parametrize("year,month,start,end", [
    (2024, 0, datetime(2024, 1, 1), datetime(2024, 2, 1)),
    (2024, 1, datetime(2024, 2, 1), datetime(2024, 3, 1)),
    (2024, 11, datetime(2024, 12, 1), datetime(2025, 1, 1)),
])
def test_month_bounds_zero_indexed(year, month, start, end):
    assert month_bounds(year, month) == (start, end)


@pytest.mark.parametrize("month", [-1, 12])
def test_month_bounds_rejects_out_of_range(month):
    with pytest.raises(ValueError):
        month_bounds(2024, month)


def test_image_row_defaults(make_user, session):
    owner = make_user("owner")
    image = Image(user_id=owner.id, path="/uploads/x.png")
    session.add(image)
    session.commit()
    session.refresh(image)
    assert image.id is not None
    assert image.description is None
    assert image.uploaded_at is not None
