"""Image validation helpers."""

from io import BytesIO

from PIL import Image, UnidentifiedImageError

# Accepted upload MIME types and the extension stored on disk
IMAGE_TYPES = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


def is_supported_type(content_type: str | None) -> bool:
    return (content_type or "").lower() in IMAGE_TYPES


def extension_for(content_type: str) -> str:
    return IMAGE_TYPES[content_type.lower()]


def is_decodable_image(image_data: bytes) -> bool:
    """Return True if Pillow can parse the bytes as an image."""
    try:
        with Image.open(BytesIO(image_data)) as img:
            img.verify()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError):
        return False
    return True
