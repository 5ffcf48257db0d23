# app/core/storage_utils.py
import logging
import random
import time
from pathlib import Path

from app.core.config import get_settings
from app.core.images import uploaded_filename

logger = logging.getLogger(__name__)


def upload_dir() -> Path:
    """
    Return the flat directory holding uploaded product images,
    creating it on first use.
    """
    path = Path(get_settings().UPLOAD_DIR)
    path.mkdir(parents=True, exist_ok=True)
    return path


def generate_filename(field: str, ext: str) -> str:
    """
    Generate a collision-resistant filename.

    Args:
        field: form field the file came from (e.g. "image")
        ext: file extension without dot (e.g. "png", "jpg")

    Returns:
        A filename like "image-1718000000000-123456789.png"
    """
    timestamp = int(time.time() * 1000)
    suffix = random.randint(0, 10**9)
    return f"{field}-{timestamp}-{suffix}.{ext}"


def save_upload(field: str, ext: str, file_bytes: bytes) -> str:
    """
    Write raw bytes to the upload directory and return the public URL path.

    Files are never overwritten: "x" mode fails if the generated name
    already exists, in which case a new name is drawn.

    Returns:
        Public path such as "/uploads/image-1718000000000-123456789.png".
    """
    directory = upload_dir()
    prefix = get_settings().UPLOADS_URL_PREFIX.rstrip("/")

    while True:
        filename = generate_filename(field, ext)
        try:
            with open(directory / filename, "xb") as fh:
                fh.write(file_bytes)
        except FileExistsError:
            continue
        return f"{prefix}/{filename}"


def delete_stored_image(image_url: str | None) -> bool:
    """
    Best-effort removal of the file backing image_url.

    No-op when the image is external, empty, or already gone.
    Filesystem errors are logged, never raised.

    Returns:
        True if a file was removed.
    """
    filename = uploaded_filename(image_url, get_settings().UPLOADS_URL_PREFIX)
    if filename is None:
        return False

    try:
        (upload_dir() / filename).unlink()
    except FileNotFoundError:
        logger.info("Image file already gone: %s", filename)
        return False
    except OSError as exc:
        logger.warning("Could not delete image file %s: %s", filename, exc)
        return False

    logger.info("Deleted image file: %s", filename)
    return True
