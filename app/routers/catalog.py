# app/routers/catalog.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from app.core.auth import TokenClaims, require_admin
from app.core.config import get_settings
from app.database import get_session
from app.repositories.product_repo import ProductRepository
from app.schemas.catalog import AdminCatalog, StorefrontCard
from app.services.catalog_service import CatalogContext, CatalogService

router = APIRouter(prefix="/catalog", tags=["Catalog"])

repo = ProductRepository()
service = CatalogService(repo)


@router.get("/storefront", response_model=list[StorefrontCard])
def storefront_catalog(session: Session = Depends(get_session)):
    """
    Product cards for the marketing site (public).
    """
    ctx = CatalogContext.from_settings(get_settings())
    return service.storefront(session, ctx)


@router.get("/admin", response_model=AdminCatalog)
def admin_catalog(
    claims: TokenClaims = Depends(require_admin),
    session: Session = Depends(get_session),
):
    """
    Product table for the admin dashboard, with the viewing admin.
    """
    ctx = CatalogContext.from_settings(get_settings(), viewer=claims)
    return service.admin(session, ctx)
