# app/services/catalog_service.py
from collections.abc import Mapping
from dataclasses import dataclass, field
from urllib.parse import quote

from sqlmodel import Session

from app.core.auth import TokenClaims
from app.core.config import Settings
from app.core.images import resolve_image_src
from app.models.product import Product
from app.repositories.product_repo import ProductRepository
from app.schemas.catalog import (
    AdminCatalog,
    AdminProductRow,
    CatalogViewer,
    StorefrontCard,
)

DEFAULT_DESCRIPTION = (
    "Discover the perfect balance of nature and wellness "
    "with our carefully crafted products."
)


@dataclass(frozen=True)
class CatalogContext:
    """
    Everything a renderer needs besides the products themselves.

    Built per request and passed explicitly; renderers never read
    settings or request state on their own.
    """

    uploads_prefix: str
    placeholder_image: str
    contact_email: str
    fallback_images: Mapping[str, str] = field(default_factory=dict)
    currency_symbol: str = "₹"
    viewer: TokenClaims | None = None

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        viewer: TokenClaims | None = None,
    ) -> "CatalogContext":
        return cls(
            uploads_prefix=settings.UPLOADS_URL_PREFIX,
            placeholder_image=settings.PLACEHOLDER_IMAGE,
            fallback_images=settings.FALLBACK_IMAGES,
            contact_email=settings.CONTACT_EMAIL,
            viewer=viewer,
        )


def format_price(price: float, ctx: CatalogContext) -> str:
    return f"{ctx.currency_symbol}{price:.2f}"


def inquiry_url(product_name: str, ctx: CatalogContext) -> str:
    """mailto: link asking about a product."""
    subject = "Hello!"
    body = (
        f"I'm interested in your {product_name or 'product'}.\n\n"
        "Could you please provide more details about:\n"
        " Product benefits and usage\n"
        " Available sizes and pricing\n"
        " Ordering process\n"
        " Thank you!"
    )
    return f"mailto:{ctx.contact_email}?subject={quote(subject)}&body={quote(body)}"


def render_storefront_card(product: Product, ctx: CatalogContext) -> StorefrontCard:
    return StorefrontCard(
        id=product.id,
        name=product.name,
        price_display=format_price(product.price, ctx),
        description=product.description or DEFAULT_DESCRIPTION,
        image_src=resolve_image_src(product.image_url, ctx.uploads_prefix),
        fallback_image_src=ctx.fallback_images.get(product.name, ctx.placeholder_image),
        inquiry_url=inquiry_url(product.name, ctx),
    )


def render_admin_row(product: Product, ctx: CatalogContext) -> AdminProductRow:
    return AdminProductRow(
        id=product.id,
        name=product.name,
        price_display=format_price(product.price, ctx),
        description=product.description or "-",
        image_src=resolve_image_src(product.image_url, ctx.uploads_prefix),
    )


class CatalogService:
    """
    Builds the storefront and admin product listings.

    Both views share resolve_image_src, so a product shows the same
    image on the marketing site and in the admin panel.
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo

    def storefront(self, session: Session, ctx: CatalogContext) -> list[StorefrontCard]:
        return [render_storefront_card(p, ctx) for p in self.repo.list_all(session)]

    def admin(self, session: Session, ctx: CatalogContext) -> AdminCatalog:
        if ctx.viewer is None:
            raise ValueError("admin catalog requires a viewer")

        return AdminCatalog(
            viewer=CatalogViewer(id=ctx.viewer.id, email=ctx.viewer.email),
            products=[render_admin_row(p, ctx) for p in self.repo.list_all(session)],
        )
