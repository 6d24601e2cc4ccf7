import logging
import re

from catalog_api.errors import InvalidArgument, NotFound, ValidationError
from catalog_api.extensions import db, persistence_errors
from catalog_api.models.product import MAX_PRICE, Product
from catalog_api.models.variant import Variant
from catalog_api.schemas import (
    ProductCreate,
    ProductDocument,
    StockUpdate,
    VariantIn,
    validate,
)
from catalog_api.services.common import (
    page_args,
    page_result,
    parse_bool,
    parse_id,
    parse_number,
    to_money,
)

logger = logging.getLogger(__name__)

SEARCH_WEIGHTS = {"name": 3, "tags": 2, "description": 1}

STOP_WORDS = {
    "a", "an", "and", "are", "as", "at", "be", "by", "for", "from", "in",
    "is", "it", "of", "on", "or", "the", "to", "with",
}


def _active():
    return Product.query.filter(Product.is_active.is_(True))


def _newest_first(query):
    return query.order_by(Product.created_at.desc(), Product.id.desc())


def _apply_fields(product, data):
    product.name = data.name
    product.description = data.description
    product.price = to_money(data.price)
    product.category = data.category
    product.brand = data.brand
    product.tags = list(data.tags)
    product.rating_average = data.rating.average
    product.rating_count = data.rating.count
    product.is_active = data.is_active
    product.is_featured = data.is_featured


def _fill_variant(variant, item, position):
    variant.color = item.color
    variant.size = item.size
    variant.stock = item.stock
    variant.images = list(item.images)
    variant.position = position
    if item.sku:
        variant.sku = item.sku
    return variant


def _document(product):
    """The stored product as an update payload, the base for merging."""
    return {
        "name": product.name,
        "description": product.description,
        "price": float(product.price),
        "category": product.category,
        "brand": product.brand,
        "tags": list(product.tags or []),
        "rating": {
            "average": product.rating_average,
            "count": product.rating_count,
        },
        "isActive": product.is_active,
        "isFeatured": product.is_featured,
        "variants": [v.to_dict() for v in product.variants],
    }


def _replace_variants(product, items):
    existing = {v.id: v for v in product.variants}
    wanted = [item.id for item in items if item.id is not None]
    if len(wanted) != len(set(wanted)):
        raise ValidationError(
            "Error updating product: duplicate variant id",
            errors=[{"field": "variants", "message": "Duplicate variant id"}],
        )
    for variant_id in wanted:
        if variant_id not in existing:
            raise NotFound(f"Variant {variant_id} not found")

    variants = []
    for position, item in enumerate(items):
        variant = existing.get(item.id) if item.id is not None else Variant()
        variants.append(_fill_variant(variant, item, position))
    product.variants = variants


@persistence_errors()
def create_product(payload):
    """Validate and persist a new product with its variants.

    Variants without a sku get one generated when the row is inserted.
    """
    data = validate(ProductCreate, payload, "Error creating product")

    product = Product()
    _apply_fields(product, data)
    for position, item in enumerate(data.variants):
        product.variants.append(_fill_variant(Variant(), item, position))

    db.session.add(product)
    db.session.commit()
    logger.info(
        "Created product %s with %d variants", product.id, len(product.variants)
    )
    return product


@persistence_errors()
def list_products(filters=None, page=None, limit=None):
    """Active products, newest first, one page at a time.

    Recognised filters: ``category`` (exact), ``minPrice``/``maxPrice``
    (inclusive) and ``inStock`` (only ``true`` restricts).
    """
    filters = filters or {}
    query = _active()

    category = filters.get("category")
    if category:
        query = query.filter(Product.category == category)

    min_price = parse_number(filters.get("minPrice"), "minPrice", MAX_PRICE)
    max_price = parse_number(filters.get("maxPrice"), "maxPrice", MAX_PRICE)
    if min_price is not None:
        query = query.filter(Product.price >= to_money(min_price))
    if max_price is not None:
        query = query.filter(Product.price <= to_money(max_price))

    if parse_bool(filters.get("inStock")) is True:
        query = query.filter(Product.variants.any(Variant.stock > 0))

    page, limit = page_args(page, limit)
    pagination = _newest_first(query).paginate(
        page=page, per_page=limit, error_out=False
    )
    return page_result(pagination)


@persistence_errors()
def get_product(product_id):
    """Look up a product by id whether or not it is active."""
    ident = parse_id(product_id, "product ID")
    product = db.session.get(Product, ident)
    if product is None:
        raise NotFound("Product not found")
    return product


@persistence_errors()
def get_products_by_category(category):
    return _newest_first(_active().filter(Product.category == category)).all()


@persistence_errors()
def get_products_by_color(color):
    """Active products with any variant whose color contains ``color``."""
    if not color or not color.strip():
        raise InvalidArgument("Color is required")
    escaped = (
        color.strip()
        .replace("\\", "\\\\")
        .replace("%", "\\%")
        .replace("_", "\\_")
    )
    query = _active().filter(
        Product.variants.any(Variant.color.ilike(f"%{escaped}%", escape="\\"))
    )
    return _newest_first(query).all()


def _stem(word):
    if len(word) > 3 and word.endswith("s") and not word.endswith("ss"):
        return word[:-1]
    return word


def _terms(text):
    words = re.findall(r"[a-z0-9]+", (text or "").lower())
    return [_stem(w) for w in words if w not in STOP_WORDS]


def _score(product, terms):
    wanted = set(terms)
    fields = {
        "name": product.name,
        "tags": " ".join(product.tags or []),
        "description": product.description,
    }
    score = 0
    for field, text in fields.items():
        hits = sum(1 for word in _terms(text) if word in wanted)
        score += SEARCH_WEIGHTS[field] * hits
    return score


@persistence_errors()
def search_products(term):
    """Rank active products by weighted term hits in name, tags and description."""
    if term is None or not str(term).strip():
        raise InvalidArgument("Search query is required")

    terms = list(dict.fromkeys(_terms(str(term))))
    if not terms:
        return []

    conditions = []
    for t in terms:
        pattern = f"%{t}%"
        conditions.extend(
            [
                Product.name.ilike(pattern),
                Product.description.ilike(pattern),
                db.cast(Product.tags, db.String).ilike(pattern),
            ]
        )
    candidates = _active().filter(db.or_(*conditions)).all()

    scored = [(_score(p, terms), p) for p in candidates]
    scored = [(s, p) for s, p in scored if s > 0]
    scored.sort(key=lambda pair: (-pair[0], -pair[1].id))
    return [p for _, p in scored]


@persistence_errors()
def update_product(product_id, payload):
    """Merge ``payload`` onto the stored product and re-validate the result.

    A ``variants`` list replaces the current one; items carrying an existing
    variant ``id`` are updated in place and keep their sku.
    """
    product = get_product(product_id)
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")

    merged = _document(product)
    for key, value in payload.items():
        if key == "rating" and isinstance(value, dict):
            merged["rating"] = {**merged["rating"], **value}
        else:
            merged[key] = value

    data = validate(ProductDocument, merged, "Error updating product")
    if "variants" in payload:
        _replace_variants(product, data.variants)
    _apply_fields(product, data)

    db.session.commit()
    logger.info("Updated product %s", product.id)
    return product


@persistence_errors()
def add_variant(product_id, payload):
    product = get_product(product_id)
    item = validate(VariantIn, payload, "Error adding variant")

    position = max((v.position or 0 for v in product.variants), default=-1) + 1
    product.variants.append(_fill_variant(Variant(), item, position))
    db.session.commit()
    logger.info("Added variant to product %s", product.id)
    return product


@persistence_errors()
def update_variant_stock(product_id, variant_id, stock):
    """Set one variant's stock.

    This is a read-modify-write of the product: two concurrent callers
    race and the last commit wins.
    """
    product_ident = parse_id(product_id, "product ID")
    variant_ident = parse_id(variant_id, "variant ID")
    data = validate(StockUpdate, {"stock": stock}, "Error updating variant stock")

    product = get_product(product_ident)
    variant = product.find_variant(variant_ident)
    if variant is None:
        raise NotFound("Variant not found")

    variant.stock = data.stock
    db.session.commit()
    logger.info(
        "Set stock of variant %s on product %s to %d",
        variant.id, product.id, data.stock,
    )
    return product


@persistence_errors()
def remove_variant(product_id, variant_id):
    """Remove one variant. The last variant of a product cannot be removed."""
    variant_ident = parse_id(variant_id, "variant ID")
    product = get_product(product_id)
    variant = product.find_variant(variant_ident)
    if variant is None:
        raise NotFound("Variant not found")

    if len(product.variants) == 1:
        logger.warning("Refused to remove last variant of product %s", product.id)
        raise ValidationError(
            "Product must have at least one variant",
            errors=[
                {"field": "variants", "message": "Product must have at least one variant"}
            ],
        )

    product.variants.remove(variant)
    db.session.commit()
    logger.info("Removed variant %s from product %s", variant_ident, product.id)
    return product


@persistence_errors()
def soft_delete_product(product_id):
    product = get_product(product_id)
    product.is_active = False
    db.session.commit()
    logger.info("Deactivated product %s", product.id)
    return product


@persistence_errors()
def get_statistics():
    """Counts over active products: per category and across all variants."""
    total = _active().count()

    count_col = db.func.count(Product.id)
    rows = (
        db.session.query(Product.category, count_col, db.func.avg(Product.price))
        .filter(Product.is_active.is_(True))
        .group_by(Product.category)
        .order_by(count_col.desc(), Product.category)
        .all()
    )
    categories = [
        {
            "category": category,
            "count": count,
            "averagePrice": round(float(avg), 2) if avg is not None else 0.0,
        }
        for category, count, avg in rows
    ]

    total_variants, total_stock = (
        db.session.query(
            db.func.count(Variant.id),
            db.func.coalesce(db.func.sum(Variant.stock), 0),
        )
        .join(Product, Variant.product_id == Product.id)
        .filter(Product.is_active.is_(True))
        .one()
    )

    return {
        "totalProducts": total,
        "categoryDistribution": categories,
        "variantStats": {
            "totalVariants": total_variants,
            "totalStock": int(total_stock),
        },
    }
