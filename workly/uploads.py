"""
Image uploads to Supabase Storage.

Avatars overwrite a fixed per-user object so a profile only ever has one.
Other images get a fresh random name in the public `uploads` bucket. Both
return the object's public URL with a `?v=<epoch millis>` cache buster so a
re-uploaded avatar shows up immediately.
"""

import logging
import re
import time
import uuid
from typing import Optional

logger = logging.getLogger(__name__)

AVATARS_BUCKET = "avatars"
UPLOADS_BUCKET = "uploads"
DEFAULT_EXTENSION = "jpg"
CACHE_CONTROL = "3600"

_EXTENSION_RE = re.compile(r"^[a-z0-9]+$")


class UploadError(Exception):
    """Raised when an upload or public URL lookup fails."""


def safe_extension(filename: str) -> str:
    """Lowercased extension of `filename`, or `jpg` if it is missing or odd.

    A name without a dot has no extension, so the whole name is never used.
    """
    if "." not in filename:
        return DEFAULT_EXTENSION
    ext = filename.rsplit(".", 1)[1].lower()
    return ext if _EXTENSION_RE.match(ext) else DEFAULT_EXTENSION


def _error_message(error: Exception) -> str:
    message = getattr(error, "message", None)
    if message:
        return str(message)
    if error.args and isinstance(error.args[0], dict):
        return str(error.args[0].get("message") or error.args[0])
    return str(error)


def _cache_busted(url: str) -> str:
    return f"{url.rstrip('?')}?v={int(time.time() * 1000)}"


def _upload(
    client,
    bucket: str,
    path: str,
    content: bytes,
    content_type: Optional[str],
    upsert: bool,
    missing_url_message: str,
) -> str:
    file_options = {"cache-control": CACHE_CONTROL, "upsert": "true" if upsert else "false"}
    if content_type:
        file_options["content-type"] = content_type

    storage = client.storage.from_(bucket)
    try:
        storage.upload(path, content, file_options=file_options)
    except Exception as e:
        message = _error_message(e)
        logger.warning(f"Upload to {bucket}/{path} failed: {message}")
        raise UploadError(message) from e

    public_url = storage.get_public_url(path)
    if not public_url:
        raise UploadError(missing_url_message)

    logger.info(f"Uploaded {bucket}/{path} ({len(content)} bytes)")
    return _cache_busted(public_url)


def upload_avatar_and_get_public_url(
    client,
    user_id: str,
    filename: str,
    content: bytes,
    content_type: Optional[str] = None,
) -> str:
    path = f"{user_id}/avatar.{safe_extension(filename)}"
    return _upload(
        client,
        AVATARS_BUCKET,
        path,
        content,
        content_type,
        upsert=True,
        missing_url_message="Failed to get avatar public URL",
    )


def upload_image_and_get_public_url(
    client,
    folder: str,
    filename: str,
    content: bytes,
    content_type: Optional[str] = None,
) -> str:
    path = f"{folder.strip('/')}/{uuid.uuid4()}.{safe_extension(filename)}"
    return _upload(
        client,
        UPLOADS_BUCKET,
        path,
        content,
        content_type,
        upsert=False,
        missing_url_message="Failed to get upload public URL",
    )
