from datetime import datetime, timezone
from catalog_api.extensions import db


CATEGORIES = (
    "Electronics",
    "Clothing",
    "Footwear",
    "Accessories",
    "Home",
    "Sports",
    "Books",
    "Other",
)

# Largest value a Numeric(12, 2) price column holds.
MAX_PRICE = 9_999_999_999.99


class Product(db.Model):
    __tablename__ = "products"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    price = db.Column(db.Numeric(12, 2), nullable=False)
    category = db.Column(db.String(50), nullable=False)
    brand = db.Column(db.String(255))
    tags = db.Column(db.JSON, default=list)  # ["running", "leather"]
    rating_average = db.Column(db.Float, nullable=False, default=0)
    rating_count = db.Column(db.Integer, nullable=False, default=0)
    is_active = db.Column(db.Boolean, nullable=False, default=True, index=True)
    is_featured = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )
    updated_at = db.Column(
        db.DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    variants = db.relationship(
        "Variant",
        backref="product",
        lazy="select",
        cascade="all, delete-orphan",
        order_by="Variant.position",
    )

    __table_args__ = (
        db.Index("ix_products_category_price", "category", "price"),
    )

    @property
    def total_stock(self):
        return sum(v.stock or 0 for v in self.variants)

    @property
    def available_colors(self):
        return list(dict.fromkeys(v.color for v in self.variants))

    @property
    def available_sizes(self):
        return list(dict.fromkeys(v.size for v in self.variants))

    def is_in_stock(self):
        return self.total_stock > 0

    def variants_by_color(self, color):
        """Variants whose color matches ``color`` ignoring case."""
        wanted = color.lower()
        return [v for v in self.variants if v.color.lower() == wanted]

    def find_variant(self, variant_id):
        for v in self.variants:
            if v.id == variant_id:
                return v
        return None

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": float(self.price) if self.price is not None else None,
            "category": self.category,
            "brand": self.brand,
            "tags": list(self.tags or []),
            "rating": {
                "average": self.rating_average,
                "count": self.rating_count,
            },
            "isActive": self.is_active,
            "isFeatured": self.is_featured,
            "variants": [v.to_dict() for v in self.variants],
            "totalStock": self.total_stock,
            "availableColors": self.available_colors,
            "availableSizes": self.available_sizes,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f"<Product {self.id}: {self.name}>"
