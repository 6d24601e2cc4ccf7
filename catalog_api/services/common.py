"""Helpers shared by the resource services."""
import re
from decimal import Decimal

from flask import current_app

from catalog_api.errors import InvalidArgument, InvalidId

ID_RE = re.compile(r"[0-9]+")

# Ids are 32-bit integer primary keys.
MAX_ID = 2_147_483_647

# Pages past this one are always empty; larger requests are clamped to it.
MAX_PAGE = 1_000_000


def to_money(value):
    """Round to a two-decimal ``Decimal`` for Numeric columns."""
    return Decimal(str(value)).quantize(Decimal("0.01"))


def parse_id(value, label="ID"):
    """Coerce a path/body id to a positive int or raise ``InvalidId``."""
    if isinstance(value, bool):
        raise InvalidId(f"Invalid {label} format")
    if isinstance(value, int):
        ident = value
    else:
        text = str(value).strip()
        if not ID_RE.fullmatch(text) or len(text) > len(str(MAX_ID)):
            raise InvalidId(f"Invalid {label} format")
        ident = int(text)
    if ident <= 0 or ident > MAX_ID:
        raise InvalidId(f"Invalid {label} format")
    return ident


def _positive_int(value, default):
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def page_args(page=None, limit=None):
    """Return ``(page, limit)``, falling back to defaults for bad input."""
    default_limit = current_app.config["DEFAULT_PAGE_SIZE"]
    max_limit = current_app.config["MAX_PAGE_SIZE"]
    page = min(_positive_int(page, 1), MAX_PAGE)
    limit = min(_positive_int(limit, default_limit), max_limit)
    return page, limit


def parse_bool(value):
    """``True``/``False`` for boolean-ish input, ``None`` when absent or unknown."""
    if value is None:
        return None
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text == "true":
        return True
    if text == "false":
        return False
    return None


def parse_number(value, name, limit=None):
    """Parse an optional numeric query value; ``limit`` bounds its magnitude."""
    if value is None or value == "":
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidArgument(f"{name} must be a number") from None
    if number != number or number in (float("inf"), float("-inf")):
        raise InvalidArgument(f"{name} must be a number")
    if limit is not None and abs(number) > limit:
        raise InvalidArgument(f"{name} must be between {-limit} and {limit}")
    return number


def page_result(pagination):
    """Flatten a Flask-SQLAlchemy ``Pagination`` into a plain dict."""
    return {
        "items": pagination.items,
        "total": pagination.total,
        "page": pagination.page,
        "limit": pagination.per_page,
        "total_pages": pagination.pages,
    }
