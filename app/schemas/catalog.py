# app/schemas/catalog.py
from sqlmodel import SQLModel


class StorefrontCard(SQLModel):
    """
    One product card on the marketing site.

    - image_src: None => show the "No Image" block
    - fallback_image_src: used when image_src fails to load
    - inquiry_url: mailto link behind the "Buy Now" button
    """

    id: int
    name: str
    price_display: str
    description: str
    image_src: str | None = None
    fallback_image_src: str
    inquiry_url: str


class AdminProductRow(SQLModel):
    """One row of the admin products table."""

    id: int
    name: str
    price_display: str
    description: str
    image_src: str | None = None


class CatalogViewer(SQLModel):
    id: int
    email: str


class AdminCatalog(SQLModel):
    viewer: CatalogViewer
    products: list[AdminProductRow]
