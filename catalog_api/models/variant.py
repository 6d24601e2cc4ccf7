import secrets
import string
import time

from sqlalchemy import event

from catalog_api.extensions import db


SIZES = ("XS", "S", "M", "L", "XL", "XXL", "Free Size")

_BASE36 = string.digits + string.ascii_lowercase


def _base36(number):
    if number == 0:
        return "0"
    digits = []
    while number:
        number, rem = divmod(number, 36)
        digits.append(_BASE36[rem])
    return "".join(reversed(digits))


def generate_sku(category):
    """Build a SKU like ``FOO-LZ3K1Q2A-4F7XQ`` from the product category."""
    timestamp = _base36(int(time.time() * 1000))
    suffix = "".join(secrets.choice(_BASE36) for _ in range(5))
    prefix = (category or "GEN")[:3]
    return f"{prefix}-{timestamp}-{suffix}".upper()


class Variant(db.Model):
    __tablename__ = "variants"

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(
        db.Integer,
        db.ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    color = db.Column(db.String(100), nullable=False, index=True)
    size = db.Column(db.String(20), nullable=False)
    stock = db.Column(db.Integer, nullable=False, default=0, index=True)
    sku = db.Column(db.String(64), unique=True)  # NULL allowed until assigned
    images = db.Column(db.JSON, default=list)
    position = db.Column(db.Integer, default=0)

    __table_args__ = (
        db.CheckConstraint("stock >= 0", name="ck_variant_stock_non_negative"),
    )

    def to_dict(self):
        return {
            "id": self.id,
            "color": self.color,
            "size": self.size,
            "stock": self.stock,
            "sku": self.sku,
            "images": list(self.images or []),
        }

    def __repr__(self):
        return f"<Variant {self.sku}: {self.color}/{self.size}>"


@event.listens_for(Variant, "before_insert")
@event.listens_for(Variant, "before_update")
def _assign_sku(mapper, connection, target):
    if not target.sku:
        category = target.product.category if target.product else None
        target.sku = generate_sku(category)
