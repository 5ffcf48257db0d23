# app/services/product_service.py
import logging
import math
import os
import re

from fastapi import HTTPException, status
from sqlmodel import Session

from app.core.config import get_settings
from app.core.locks import KeyedLock
from app.core.storage_utils import delete_stored_image, save_upload
from app.models.product import Product, utc_now
from app.repositories.product_repo import ProductRepository
from app.schemas.product import ImageUpload, ProductInput

logger = logging.getLogger(__name__)


# --- Image config ---

ALLOWED_IMAGE_TYPES = re.compile(r"jpeg|jpg|png|gif|webp")


class ProductService:
    """
    Business logic for Product.

    Responsibilities:
      - field validation (name/price) with 400 messages
      - choosing the stored image_url (upload beats image_url)
      - image file lifecycle: store new uploads, remove replaced or
        orphaned files from the upload directory
      - serialising update/delete per product id
      - admin-only operations (enforced at router via require_admin)
    """

    def __init__(self, repo: ProductRepository):
        self.repo = repo
        self.locks = KeyedLock()

    # ----- Helpers -----

    @staticmethod
    def _parse_price(raw: str | float | int) -> float:
        try:
            value = float(raw.strip()) if isinstance(raw, str) else float(raw)
        except OverflowError:
            # ints beyond float range
            raise ValueError("price out of range")
        if not math.isfinite(value) or value < 0:
            raise ValueError("price out of range")
        return value

    def _validate_fields(self, payload: ProductInput) -> tuple[str, float, str | None]:
        """
        Return (name, price, description) or raise 400.

        - name and price are required (blank counts as missing)
        - price must be a finite, non-negative number
        - an empty description is stored as NULL
        """
        name = payload.name.strip() if payload.name else ""
        raw_price = payload.price
        if isinstance(raw_price, str):
            raw_price = raw_price.strip() or None

        if not name or raw_price is None:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Name and price are required",
            )

        try:
            price = self._parse_price(raw_price)
        except (TypeError, ValueError):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Price must be a valid number",
            )

        return name, price, payload.description or None

    @staticmethod
    def _validate_and_get_ext(image: ImageUpload) -> str:
        """
        Check type and size of an uploaded image.

        Both the filename extension and the declared content type must be
        one of jpeg/jpg/png/gif/webp.

        Returns:
            Lower-case extension without the dot.
        """
        ext = os.path.splitext(image.filename)[1].lower().lstrip(".")
        content_type = (image.content_type or "").lower()

        if not ALLOWED_IMAGE_TYPES.fullmatch(ext) or not ALLOWED_IMAGE_TYPES.search(content_type):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Only image files are allowed",
            )

        if len(image.data) > get_settings().MAX_IMAGE_BYTES:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                detail="Image too large (max 5MB).",
            )

        return ext

    def _store_image(self, image: ImageUpload) -> str:
        ext = self._validate_and_get_ext(image)
        return save_upload(image.field, ext, image.data)

    # ----- Products -----

    def list_products(self, session: Session) -> list[Product]:
        return self.repo.list_all(session)

    def get_product(self, session: Session, product_id: int) -> Product:
        product = self.repo.get_by_id(session, product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found",
            )
        return product

    def create_product(
        self,
        session: Session,
        payload: ProductInput,
        image: ImageUpload | None = None,
    ) -> Product:
        """
        Create a new product.

        Image precedence:
          - uploaded file => stored under the upload dir, image_url = "/uploads/<file>"
          - else image_url from the payload (if non-empty)
          - else no image
        """
        name, price, description = self._validate_fields(payload)

        image_url = payload.image_url or None
        if image is not None:
            image_url = self._store_image(image)

        product = Product(
            name=name,
            price=price,
            description=description,
            image_url=image_url,
        )
        try:
            return self.repo.create(session, product)
        except Exception:
            session.rollback()
            if image is not None:
                delete_stored_image(image_url)
            raise

    def update_product(
        self,
        session: Session,
        product_id: int,
        payload: ProductInput,
        image: ImageUpload | None = None,
    ) -> Product:
        """
        Full update of name/price/description; image_url only when asked.

        - new file      => store it, repoint image_url, remove the old file
        - image_url key => override ("" clears the image)
        - neither       => keep the stored image_url
        """
        name, price, description = self._validate_fields(payload)

        with self.locks.hold(product_id):
            product = self.get_product(session, product_id)
            previous_url = product.image_url
            new_url = None

            if image is not None:
                new_url = self._store_image(image)
                product.image_url = new_url
            elif payload.image_url_provided:
                product.image_url = payload.image_url or None

            product.name = name
            product.price = price
            product.description = description
            product.updated_at = utc_now()

            try:
                product = self.repo.update(session, product)
            except Exception:
                session.rollback()
                if new_url is not None:
                    delete_stored_image(new_url)
                raise

            # Best-effort cleanup of the replaced upload
            if new_url is not None and previous_url and previous_url != new_url:
                delete_stored_image(previous_url)

        return product

    def delete_product(
        self,
        session: Session,
        product_id: int,
    ) -> None:
        """
        Delete a product and its uploaded image file.

        A missing file is not an error.
        """
        with self.locks.hold(product_id):
            product = self.get_product(session, product_id)

            if product.image_url:
                delete_stored_image(product.image_url)

            self.repo.delete(session, product)

        logger.info("Deleted product %s", product_id)
