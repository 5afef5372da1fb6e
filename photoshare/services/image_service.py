"""Image storage, sharing, date bucketing and deletion."""

import logging
from datetime import datetime

from sqlalchemy import extract
from sqlmodel import Session, col, select

from photoshare.models.image import Image, ImageShare
from photoshare.models.notification import Notification

logger = logging.getLogger(__name__)


def create_image(
    user_id: int,
    path: str,
    description: str | None,
    session: Session,
    share_user_ids: list[int] | None = None,
    share_group_ids: list[int] | None = None,
) -> Image:
    """Insert an image together with its shares in one transaction."""
    image = Image(user_id=user_id, path=path, description=description or None)
    session.add(image)
    session.flush()

    for uid in share_user_ids or []:
        session.add(ImageShare(image_id=image.id, user_id=uid))
    for gid in share_group_ids or []:
        session.add(ImageShare(image_id=image.id, group_id=gid))

    session.commit()
    session.refresh(image)
    logger.info(
        "Stored image %s for user %s (%d user share(s), %d group share(s))",
        image.id, user_id, len(share_user_ids or []), len(share_group_ids or []),
    )
    return image


def get_image(image_id: int, session: Session) -> Image | None:
    return session.get(Image, image_id)


def list_user_images(user_id: int, session: Session) -> list[Image]:
    """All images owned by the user, most recent first."""
    return list(session.exec(
        select(Image)
        .where(Image.user_id == user_id)
        .order_by(col(Image.uploaded_at).desc(), col(Image.id).desc())
    ).all())


def month_bounds(year: int, month: int) -> tuple[datetime, datetime]:
    """Half-open [start, end) range for a zero-indexed month (January = 0)."""
    if not 0 <= month <= 11:
        raise ValueError("Month must be between 0 and 11")
    start = datetime(year, month + 1, 1)
    if month == 11:
        end = datetime(year + 1, 1, 1)
    else:
        end = datetime(year, month + 2, 1)
    return start, end


def list_user_images_by_month(
    user_id: int, year: int, month: int, session: Session
) -> list[Image]:
    """Images the user uploaded within the given zero-indexed month."""
    start, end = month_bounds(year, month)
    return list(session.exec(
        select(Image)
        .where(
            Image.user_id == user_id,
            Image.uploaded_at >= start,
            Image.uploaded_at < end,
        )
        .order_by(col(Image.uploaded_at).desc(), col(Image.id).desc())
    ).all())


def list_user_image_months(user_id: int, session: Session) -> list[tuple[int, int]]:
    """Distinct (year, month) pairs with images, newest first.

    The database reports months 1-12; they are returned zero-indexed.
    """
    year_col = extract("year", Image.uploaded_at)
    month_col = extract("month", Image.uploaded_at)
    rows = session.exec(
        select(year_col, month_col)
        .where(Image.user_id == user_id)
        .group_by(year_col, month_col)
        .order_by(year_col.desc(), month_col.desc())
    ).all()
    return [(int(year), int(month) - 1) for year, month in rows]


def list_image_shares(image_id: int, session: Session) -> list[ImageShare]:
    return list(session.exec(
        select(ImageShare)
        .where(ImageShare.image_id == image_id)
        .order_by(col(ImageShare.id))
    ).all())


def list_group_images(group_id: int, session: Session) -> list[Image]:
    """Images shared with the group, most recent first."""
    shared_ids = select(ImageShare.image_id).where(ImageShare.group_id == group_id)
    return list(session.exec(
        select(Image)
        .where(col(Image.id).in_(shared_ids))
        .order_by(col(Image.uploaded_at).desc(), col(Image.id).desc())
    ).all())


def delete_image(image: Image, session: Session) -> None:
    """Delete an image with its shares and notifications in one transaction."""
    image_id = image.id
    for share in session.exec(select(ImageShare).where(ImageShare.image_id == image_id)).all():
        session.delete(share)
    for notification in session.exec(
        select(Notification).where(Notification.image_id == image_id)
    ).all():
        session.delete(notification)
    session.flush()
    session.delete(image)
    session.commit()
    logger.info("Deleted image %s with its shares and notifications", image_id)
