# app/routers/products.py
from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Request,
    status,
)
from pydantic import ValidationError
from sqlmodel import Session
from starlette.datastructures import UploadFile

from app.core.auth import require_admin
from app.core.config import get_settings
from app.core.errors import format_validation_errors
from app.database import get_session
from app.repositories.product_repo import ProductRepository
from app.schemas.product import (
    ImageUpload,
    ProductDeleted,
    ProductInput,
    ProductRead,
)
from app.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["Products"])

repo = ProductRepository()
service = ProductService(repo)

IMAGE_FIELD = "image"
TEXT_FIELDS = ("name", "price", "description", "image_url")


async def read_product_form(request: Request) -> tuple[ProductInput, ImageUpload | None]:
    """
    Parse the admin product form.

    Accepts:
      - multipart/form-data (text fields + optional `image` file)
      - application/x-www-form-urlencoded
      - application/json (no file; `image_url` only)
    """
    content_type = request.headers.get("content-type", "")

    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Invalid JSON body",
            )
        fields = {k: v for k, v in body.items() if k in TEXT_FIELDS}
        image = None
    else:
        form = await request.form()
        fields = {k: v for k, v in form.items() if k in TEXT_FIELDS and isinstance(v, str)}
        image = None

        upload = form.get(IMAGE_FIELD)
        # Browsers send an empty part when no file was chosen
        if isinstance(upload, UploadFile) and upload.filename:
            # Reject before buffering the whole file
            if upload.size is not None and upload.size > get_settings().MAX_IMAGE_BYTES:
                raise HTTPException(
                    status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                    detail="Image too large (max 5MB).",
                )
            image = ImageUpload(
                field=IMAGE_FIELD,
                filename=upload.filename,
                content_type=upload.content_type,
                data=await upload.read(),
            )

    try:
        payload = ProductInput.model_validate(fields)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=format_validation_errors(exc.errors()),
        )

    return payload, image


# -------- Public endpoints --------


@router.get("/public", response_model=list[ProductRead])
def list_public_products(session: Session = Depends(get_session)):
    """
    List all products, newest first.

    - Public endpoint used by the storefront.
    """
    return service.list_products(session)


# -------- Admin endpoints --------


@router.get(
    "",
    response_model=list[ProductRead],
    dependencies=[Depends(require_admin)],
)
def list_products(session: Session = Depends(get_session)):
    """
    List all products (admin only). Same fields as the public listing.
    """
    return service.list_products(session)


@router.get(
    "/{product_id}",
    response_model=ProductRead,
    dependencies=[Depends(require_admin)],
)
def get_product(
    product_id: int,
    session: Session = Depends(get_session),
):
    """
    Get a single product by id (admin only).
    """
    return service.get_product(session, product_id)


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_product(
    form: tuple[ProductInput, ImageUpload | None] = Depends(read_product_form),
    session: Session = Depends(get_session),
):
    """
    Create a new product (admin only).

    - `image` file (JPEG, PNG, GIF, WEBP; max 5MB) wins over `image_url`.
    """
    payload, image = form
    return service.create_product(session, payload, image)


@router.put(
    "/{product_id}",
    response_model=ProductRead,
    dependencies=[Depends(require_admin)],
)
def update_product(
    product_id: int,
    form: tuple[ProductInput, ImageUpload | None] = Depends(read_product_form),
    session: Session = Depends(get_session),
):
    """
    Update an existing product (admin only).

    - name/price/description are always overwritten.
    - image: new file replaces (old upload removed); `image_url` overrides,
      "" clears; neither keeps the current image.
    """
    payload, image = form
    return service.update_product(session, product_id, payload, image)


@router.delete(
    "/{product_id}",
    response_model=ProductDeleted,
    dependencies=[Depends(require_admin)],
)
def delete_product(
    product_id: int,
    session: Session = Depends(get_session),
):
    """
    Delete a product and its uploaded image file (admin only).
    """
    service.delete_product(session, product_id)
    return ProductDeleted(message="Product deleted successfully")
