"""PhotoShare Database Models."""

from photoshare.models.user import User
from photoshare.models.image import Image, ImageShare
from photoshare.models.friendship import Friendship
from photoshare.models.group import Group, GroupMember
from photoshare.models.notification import Notification

__all__ = [
    "User",
    "Image",
    "ImageShare",
    "Friendship",
    "Group",
    "GroupMember",
    "Notification",
]
