# app/schemas/product.py
from datetime import datetime

from pydantic import ConfigDict, field_validator, model_validator
from sqlmodel import SQLModel

from app.core.config import get_settings
from app.core.images import resolve_image_src


class ProductInput(SQLModel):
    """
    Raw product fields as sent by the admin panel.

    The same shape is produced from multipart forms, urlencoded forms and
    JSON bodies. Values stay loose (only booleans are refused as a
    price); the service decides what is missing or malformed so every body
    type gets the same 400 messages.

    `image_url` is tri-state:
      - key absent        -> keep the stored image
      - key present, ""   -> clear the image
      - key present, str  -> replace with that URL / filename
    Use `image_url_provided` to tell "absent" from "empty".
    """

    model_config = ConfigDict(extra="ignore")

    name: str | None = None
    price: str | float | int | None = None
    description: str | None = None
    image_url: str | None = None

    @field_validator("price", mode="before")
    @classmethod
    def reject_bool_price(cls, v):
        # bool is an int subclass; JSON true/false is not a price
        if isinstance(v, bool):
            raise ValueError("Price must be a valid number")
        return v

    @property
    def image_url_provided(self) -> bool:
        return "image_url" in self.model_fields_set


class ImageUpload(SQLModel):
    """
    A file received in the `image` form field.
    """

    field: str = "image"
    filename: str
    content_type: str | None = None
    data: bytes


class ProductRead(SQLModel):
    """
    Product representation for clients.

    `image_src` is the displayable source derived from `image_url`
    (None means: render a placeholder).
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    price: float
    description: str | None = None
    image_url: str | None = None
    image_src: str | None = None
    created_at: datetime
    updated_at: datetime

    @model_validator(mode="after")
    def fill_image_src(self) -> "ProductRead":
        self.image_src = resolve_image_src(
            self.image_url,
            get_settings().UPLOADS_URL_PREFIX,
        )
        return self


class ProductDeleted(SQLModel):
    message: str
