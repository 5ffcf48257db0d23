# app/core/images.py
"""
Product image source resolution.

Every place that displays a product image (API read models, storefront
cards, admin rows) goes through resolve_image_src so the same stored
image_url always yields the same src.
"""

import posixpath
import re

DEFAULT_UPLOADS_PREFIX = "/uploads/"

# http://, https:// or protocol-relative //
_ABSOLUTE_URL_RE = re.compile(r"^(https?:)?//", re.IGNORECASE)


def _normalize_prefix(prefix: str) -> str:
    if not prefix.startswith("/"):
        prefix = "/" + prefix
    if not prefix.endswith("/"):
        prefix = prefix + "/"
    return prefix


def is_external(image_url: str) -> bool:
    """True for absolute, protocol-relative and data: URLs."""
    return bool(_ABSOLUTE_URL_RE.match(image_url)) or image_url.startswith("data:")


def resolve_image_src(
    image_url: str | None,
    uploads_prefix: str = DEFAULT_UPLOADS_PREFIX,
) -> str | None:
    """
    Turn a stored image_url into a displayable src.

    Rules:
      - None / empty        -> None (caller renders a placeholder)
      - external or data:   -> unchanged
      - under uploads_prefix -> unchanged
      - anything else       -> bare filename, prefixed with uploads_prefix

    Examples:
        resolve_image_src("https://x/y.jpg")  -> "https://x/y.jpg"
        resolve_image_src("/uploads/a.png")   -> "/uploads/a.png"
        resolve_image_src("a.png")            -> "/uploads/a.png"
        resolve_image_src("")                 -> None
    """
    if image_url is None or not image_url.strip():
        return None

    if is_external(image_url):
        return image_url

    prefix = _normalize_prefix(uploads_prefix)
    if image_url.startswith(prefix):
        return image_url

    return f"{prefix}{image_url}"


def uploaded_filename(
    image_url: str | None,
    uploads_prefix: str = DEFAULT_UPLOADS_PREFIX,
) -> str | None:
    """
    Return the filename inside the upload directory that backs image_url,
    or None when the image is not stored locally (empty, external, data:).

    Example:
        uploaded_filename("/uploads/image-1-2.png") -> "image-1-2.png"
        uploaded_filename("https://cdn/x.png")      -> None
    """
    src = resolve_image_src(image_url, uploads_prefix)
    if src is None or is_external(src):
        return None

    name = posixpath.basename(src)
    # "/uploads/" or "/uploads/.." never point at a real upload
    if not name or name in {".", ".."}:
        return None
    return name
