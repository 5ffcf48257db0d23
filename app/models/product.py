# app/models/product.py
from datetime import datetime, timezone

from sqlmodel import SQLModel, Field


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Product(SQLModel, table=True):
    """
    Product catalog entry shown on the storefront.

    Columns:
      - id, name, price, description, image_url, created_at, updated_at

    image_url holds whatever the admin supplied or the upload produced:
      - an external URL (http/https, protocol-relative) or a data: URL
      - a path under the uploads prefix ("/uploads/image-....png")
      - a bare filename that implicitly lives under the uploads prefix
    Use app.core.images.resolve_image_src to turn it into a displayable src.
    """

    __tablename__ = "products"

    id: int | None = Field(
        default=None,
        primary_key=True,
    )

    name: str = Field(
        max_length=255,
        index=True,
        description="Display name of the product",
    )

    price: float = Field(
        ge=0,
        description="Unit price",
    )

    description: str | None = Field(
        default=None,
        description="Optional long description",
    )

    image_url: str | None = Field(
        default=None,
        description="Stored image reference (URL, uploads path or bare filename)",
    )

    created_at: datetime = Field(
        default_factory=utc_now,
        index=True,
        description="Creation timestamp (UTC)",
    )

    updated_at: datetime = Field(
        default_factory=utc_now,
        description="Last modification timestamp (UTC)",
    )
