"""
Request payload schemas.

Each pydantic model is the rule table for one payload shape. Unknown keys
are rejected, strings are stripped, and every failing field is reported.
"""
import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from catalog_api.errors import ValidationError
from catalog_api.models.account import MAX_BALANCE
from catalog_api.models.product import CATEGORIES, MAX_PRICE
from catalog_api.models.student import COURSES
from catalog_api.models.variant import SIZES

EMAIL_RE = re.compile(r"^\w+([\.-]?\w+)*@\w+([\.-]?\w+)*(\.\w{2,3})+$")

_SIZE_LOOKUP = {s.upper(): s for s in SIZES}


class Schema(BaseModel):
    model_config = ConfigDict(
        extra="forbid",
        str_strip_whitespace=True,
        populate_by_name=True,
    )


# ---------- Products ----------


class Rating(Schema):
    average: float = Field(0, ge=0, le=5, allow_inf_nan=False)
    count: int = Field(0, ge=0)


class VariantIn(Schema):
    color: str = Field(..., min_length=1, max_length=100)
    size: str
    stock: int = Field(0, ge=0)
    sku: Optional[str] = Field(None, max_length=64)
    images: List[str] = Field(default_factory=list)

    @field_validator("size")
    @classmethod
    def normalize_size(cls, v):
        size = _SIZE_LOOKUP.get(v.upper())
        if size is None:
            raise ValueError(f"'{v}' is not a valid size")
        return size

    @field_validator("sku")
    @classmethod
    def blank_sku_is_missing(cls, v):
        return v or None

    @field_validator("images")
    @classmethod
    def strip_images(cls, v):
        return [i.strip() for i in v if i and i.strip()]


class VariantItem(VariantIn):
    """A variant inside a full product document; may reference an existing id."""

    id: Optional[int] = None


class ProductCreate(Schema):
    name: str = Field(..., min_length=3, max_length=200)
    description: Optional[str] = Field(None, max_length=2000)
    price: float = Field(..., ge=0, le=MAX_PRICE, allow_inf_nan=False)
    category: str
    brand: Optional[str] = Field(None, max_length=255)
    tags: List[str] = Field(default_factory=list)
    rating: Rating = Field(default_factory=Rating)
    is_active: bool = Field(True, alias="isActive")
    is_featured: bool = Field(False, alias="isFeatured")
    variants: List[VariantIn]

    @field_validator("category")
    @classmethod
    def known_category(cls, v):
        if v not in CATEGORIES:
            raise ValueError(f"'{v}' is not a valid category")
        return v

    @field_validator("tags")
    @classmethod
    def normalize_tags(cls, v):
        tags = [t.strip().lower() for t in v if t and t.strip()]
        return list(dict.fromkeys(tags))

    @field_validator("variants")
    @classmethod
    def at_least_one_variant(cls, v):
        if not v:
            raise ValueError("Product must have at least one variant")
        return v


class ProductDocument(ProductCreate):
    """The full stored shape of a product, re-validated on every update."""

    variants: List[VariantItem]


class StockUpdate(Schema):
    stock: int = Field(..., ge=0)


# ---------- Students ----------


class StudentCreate(Schema):
    name: str = Field(..., min_length=2, max_length=50)
    age: int = Field(..., ge=5, le=100)
    course: str
    email: Optional[str] = Field(None, max_length=255)

    @field_validator("course")
    @classmethod
    def known_course(cls, v):
        if v not in COURSES:
            raise ValueError(f"'{v}' is not a valid course")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v):
        if not v:
            return None
        v = v.lower()
        if not EMAIL_RE.match(v):
            raise ValueError("Please enter a valid email")
        return v


class StudentDocument(StudentCreate):
    is_active: bool = Field(True, alias="isActive")


# ---------- Accounts ----------


class AccountCreate(Schema):
    name: str = Field(..., min_length=1, max_length=100)
    balance: float = Field(0, ge=0, le=MAX_BALANCE, allow_inf_nan=False)


class AmountRequest(Schema):
    amount: float = Field(..., gt=0, le=MAX_BALANCE, allow_inf_nan=False)


class TransferRequest(Schema):
    sender: str = Field(..., min_length=1)
    receiver: str = Field(..., min_length=1)
    amount: float = Field(..., gt=0, le=MAX_BALANCE, allow_inf_nan=False)


def _field_path(loc):
    return ".".join(str(part) for part in loc) or "__root__"


def validate(schema, payload, message="Validation failed"):
    """Validate ``payload`` against ``schema``.

    Returns the validated model, or raises ``ValidationError`` listing
    every field-level violation.
    """
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as e:
        errors = [
            {
                "field": _field_path(err["loc"]),
                "message": err["msg"].removeprefix("Value error, "),
            }
            for err in e.errors()
        ]
        summary = "; ".join(f"{err['field']}: {err['message']}" for err in errors)
        raise ValidationError(f"{message}: {summary}", errors=errors) from None
