"""Composite view assembly tests."""

from datetime import datetime

from photoshare.models.friendship import ACCEPTED, PENDING, Friendship, make_pair_key
from photoshare.models.group import GroupMember
from photoshare.models.image import Image, ImageShare
from photoshare.models.notification import GROUP_INVITE, Notification
from photoshare.services.group_service import create_group
from photoshare.services.image_service import create_image, list_user_image_months
from photoshare.services.view_service import (
    build_friends_with_users,
    build_group_with_members,
    build_image_with_shares,
    build_notification_with_details,
)


def _friendship(session, requester, addressee, status):
    f = Friendship(
        requester_id=requester.id,
        addressee_id=addressee.id,
        status=status,
        pair_key=make_pair_key(requester.id, addressee.id),
    )
    session.add(f)
    session.commit()
    session.refresh(f)
    return f


def test_image_without_shares(make_user, session):
    owner = make_user("owner")
    image = create_image(owner.id, "/uploads/a.png", "hello", session)
    view = build_image_with_shares(image, session)
    assert view.shares.users == []
    assert view.shares.groups == []
    assert view.description == "hello"


def test_image_shares_partitioned(make_user, session):
    owner = make_user("owner")
    friend = make_user("friend")
    group = create_group("Crew", None, owner.id, session)
    image = create_image(
        owner.id, "/uploads/a.png", None, session,
        share_user_ids=[friend.id], share_group_ids=[group.id],
    )

    view = build_image_with_shares(image, session)
    assert [u.username for u in view.shares.users] == ["friend"]
    assert [g.name for g in view.shares.groups] == ["Crew"]


def test_image_share_to_missing_user_skipped(make_user, session):
    owner = make_user("owner")
    image = create_image(owner.id, "/uploads/a.png", None, session)
    session.add(ImageShare(image_id=image.id, user_id=9999))
    session.commit()
    assert build_image_with_shares(image, session).shares.users == []


def test_friend_view_is_other_party(make_user, session):
    alice = make_user("alice")
    bob = make_user("bob")
    f = _friendship(session, alice, bob, ACCEPTED)

    alice_view = build_friends_with_users([f], alice.id, session)
    bob_view = build_friends_with_users([f], bob.id, session)
    assert alice_view[0].user.username == "bob"
    assert bob_view[0].user.username == "alice"


def test_pending_view_shows_requester(make_user, session):
    alice = make_user("alice")
    bob = make_user("bob")
    f = _friendship(session, alice, bob, PENDING)
    assert build_friends_with_users([f], bob.id, session)[0].user.id == alice.id


def test_friend_view_drops_missing_user(make_user, session):
    alice = make_user("alice")
    bob = make_user("bob")
    f = _friendship(session, alice, bob, ACCEPTED)
    session.delete(bob)
    session.commit()
    assert build_friends_with_users([f], alice.id, session) == []


def test_group_view_drops_missing_members(make_user, session):
    owner = make_user("owner")
    group = create_group("G", None, owner.id, session)
    session.add(GroupMember(group_id=group.id, user_id=9999))
    session.commit()

    view = build_group_with_members(group, session)
    assert [m.username for m in view.members] == ["owner"]


def test_notification_details_attached(make_user, session):
    owner = make_user("owner")
    invitee = make_user("invitee")
    group = create_group("G", None, owner.id, session)
    n = Notification(
        user_id=invitee.id,
        type=GROUP_INVITE,
        content='owner added you to the group "G"',
        sender_id=owner.id,
        group_id=group.id,
    )
    session.add(n)
    session.commit()
    session.refresh(n)

    view = build_notification_with_details(n, session)
    assert view.sender.username == "owner"
    assert view.group.name == "G"
    assert view.image is None


def test_image_months_distinct_and_descending(make_user, session):
    owner = make_user("owner")
    other = make_user("other")
    for when in [
        datetime(2022, 7, 4),
        datetime(2024, 2, 29),
        datetime(2024, 2, 1),
        datetime(2023, 12, 25),
    ]:
        session.add(Image(user_id=owner.id, path="/uploads/x.png", uploaded_at=when))
    session.add(Image(user_id=other.id, path="/uploads/y.png", uploaded_at=datetime(2025, 1, 1)))
    session.commit()

    assert list_user_image_months(owner.id, session) == [(2024, 1), (2023, 11), (2022, 6)]
