from __future__ import annotations

from app.ejama.errors import ValidationFailed
from app.ejama.modules.profile.repository import ProfileRepository

IMAGE_DATA_URL_PREFIXES = ("data:image/png", "data:image/jpeg", "data:image/webp", "data:image/gif")


def save_profile_picture(repo: ProfileRepository, user_id: str, picture: object, *, max_bytes: int) -> str:
    """
    Store the picture (an image data URL) and return it; clients use the
    stored string directly as the image url.
    """
    if not isinstance(picture, str) or not picture.strip():
        raise ValidationFailed("picture is required.")
    picture = picture.strip()
    if not picture.startswith(IMAGE_DATA_URL_PREFIXES):
        raise ValidationFailed("picture must be a PNG, JPEG, WebP or GIF data URL.")
    if len(picture.encode("utf-8")) > max_bytes:
        raise ValidationFailed(f"picture must be at most {max_bytes} bytes.")
    repo.save_picture(user_id, picture)
    return picture


def get_profile_picture(repo: ProfileRepository, user_id: str) -> str | None:
    return repo.picture(user_id)
