"""Image API endpoints."""

import json
import logging

from fastapi import APIRouter, Depends, File, Form, HTTPException, Query, UploadFile, status
from sqlmodel import Session

from photoshare.api.deps import get_current_user
from photoshare.config import settings
from photoshare.database import get_session
from photoshare.models.user import User
from photoshare.schemas.auth import MessageResponse
from photoshare.schemas.image import ImageMonthResponse, ImageResponse, ImageWithSharesResponse
from photoshare.services.access_service import can_modify_image, has_image_access, is_group_member
from photoshare.services.auth_service import get_user
from photoshare.services.group_service import get_group, list_group_member_ids
from photoshare.services.image_service import (
    create_image,
    delete_image,
    get_image,
    list_user_image_months,
    list_user_images,
    list_user_images_by_month,
)
from photoshare.services.notification_service import (
    notify_image_shared_with_group,
    notify_image_shared_with_users,
)
from photoshare.services.view_service import build_image_with_shares, image_to_response
from photoshare.utils.image import extension_for, is_decodable_image, is_supported_type
from photoshare.utils.storage import remove_upload, save_upload

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/images", tags=["images"])


def _parse_id_list(raw: str, field: str) -> list[int]:
    """Parse a JSON array of ids sent as a multipart field."""
    if not raw.strip():
        return []
    try:
        values = json.loads(raw)
    except json.JSONDecodeError:
        raise ValueError(f"{field} must be a JSON array")
    if not isinstance(values, list):
        raise ValueError(f"{field} must be a JSON array")

    ids = []
    for v in values:
        if isinstance(v, str) and v.strip().isdecimal():
            v = int(v)
        if isinstance(v, bool) or not isinstance(v, int):
            raise ValueError(f"{field} must contain ids")
        ids.append(v)
    return list(dict.fromkeys(ids))


@router.post("", response_model=ImageResponse, status_code=201)
def upload(
    image: UploadFile | None = File(default=None),
    description: str = Form(default=""),
    user_ids: str = Form(default="", alias="userIds"),
    group_ids: str = Form(default="", alias="groupIds"),
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Upload an image, optionally sharing it with users and groups."""
    if image is None or not image.filename:
        raise HTTPException(status_code=400, detail="No image file uploaded")

    if not is_supported_type(image.content_type):
        raise HTTPException(
            status_code=400,
            detail="Invalid file type. Only JPEG, PNG, GIF and WEBP are allowed.",
        )

    file_data = image.file.read()
    if not file_data:
        raise HTTPException(status_code=400, detail="Empty file")
    if len(file_data) > settings.max_upload_bytes:
        raise HTTPException(status_code=413, detail="File too large (max 10MB)")
    if not is_decodable_image(file_data):
        raise HTTPException(status_code=400, detail="Uploaded file is not a valid image")

    try:
        share_user_ids = _parse_id_list(user_ids, "userIds")
        share_group_ids = _parse_id_list(group_ids, "groupIds")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    # Resolve share targets before anything is written
    share_user_ids = [uid for uid in share_user_ids if uid != user.id]
    for uid in share_user_ids:
        if not get_user(uid, session):
            raise HTTPException(status_code=400, detail=f"User {uid} not found")
    groups = []
    for gid in share_group_ids:
        group = get_group(gid, session)
        if not group:
            raise HTTPException(status_code=400, detail=f"Group {gid} not found")
        if not is_group_member(gid, user.id, session):
            raise HTTPException(status_code=403, detail="You are not a member of this group")
        groups.append(group)

    path = save_upload(file_data, extension_for(image.content_type))
    try:
        created = create_image(
            user_id=user.id,
            path=path,
            description=description.strip(),
            session=session,
            share_user_ids=share_user_ids,
            share_group_ids=share_group_ids,
        )
    except Exception:
        remove_upload(path)
        raise

    notified = notify_image_shared_with_users(user, created, share_user_ids, session)
    for group in groups:
        member_ids = list_group_member_ids(group.id, session)
        notified += notify_image_shared_with_group(user, created, group, member_ids, session)
    if notified:
        logger.info("Sent %d share notification(s) for image %s", notified, created.id)

    return image_to_response(created)


@router.get("", response_model=list[ImageResponse])
def list_images(
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """List the caller's images, most recent first."""
    return [image_to_response(i) for i in list_user_images(user.id, session)]


@router.get("/by-date", response_model=list[ImageResponse])
def list_images_by_date(
    year: int | None = Query(default=None),
    month: int | None = Query(default=None, description="0 = January"),
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """List the caller's images for one month; all images without year and month."""
    if year is None or month is None:
        images = list_user_images(user.id, session)
    else:
        try:
            images = list_user_images_by_month(user.id, year, month, session)
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e))
    return [image_to_response(i) for i in images]


@router.get("/dates", response_model=list[ImageMonthResponse])
def list_image_dates(
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Months in which the caller uploaded images, newest first."""
    return [
        ImageMonthResponse(year=year, month=month)
        for year, month in list_user_image_months(user.id, session)
    ]


@router.get("/{image_id}", response_model=ImageWithSharesResponse)
def get_image_detail(
    image_id: int,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Get an image with the users and groups it is shared with."""
    image = get_image(image_id, session)
    if not image:
        raise HTTPException(status_code=404, detail="Image not found")
    if not has_image_access(user.id, image_id, session):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You don't have access to this image",
        )
    return build_image_with_shares(image, session)


@router.delete("/{image_id}", response_model=MessageResponse)
def delete_image_endpoint(
    image_id: int,
    user: User = Depends(get_current_user),
    session: Session = Depends(get_session),
):
    """Delete an owned image along with its shares, notifications and file."""
    image = get_image(image_id, session)
    if not image:
        raise HTTPException(status_code=404, detail="Image not found")
    if not can_modify_image(image, user.id):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only delete your own images",
        )

    path = image.path
    delete_image(image, session)
    remove_upload(path)
    return MessageResponse(message="Image deleted successfully")
