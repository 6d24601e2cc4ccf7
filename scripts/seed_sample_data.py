#!/usr/bin/env python3
"""Seed sample products for local development."""
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from catalog_api import create_app
from catalog_api.extensions import db
from catalog_api.models.product import Product
from catalog_api.services.product_service import create_product

app = create_app()

SAMPLE_PRODUCTS = [
    {
        "name": "Classic Leather Sneaker",
        "description": "Full-grain leather sneaker with a cushioned insole.",
        "price": 74.0,
        "category": "Footwear",
        "brand": "Stride",
        "tags": ["leather", "casual", "sneaker"],
        "variants": [
            {"color": "White", "size": "M", "stock": 18},
            {"color": "White", "size": "L", "stock": 7},
            {"color": "Tan", "size": "M", "stock": 0},
        ],
    },
    {
        "name": "Merino Wool Sweater",
        "description": "Fine-knit merino sweater, warm without the bulk.",
        "price": 96.0,
        "category": "Clothing",
        "tags": ["wool", "merino", "winter"],
        "variants": [
            {"color": "Charcoal Grey", "size": "S", "stock": 5},
            {"color": "Charcoal Grey", "size": "M", "stock": 9},
            {"color": "Forest Green", "size": "XL", "stock": 2},
        ],
    },
    {
        "name": "Stainless Water Bottle",
        "description": "Insulated bottle that keeps drinks cold for 24 hours.",
        "price": 29.0,
        "category": "Sports",
        "tags": ["hydration", "outdoor"],
        "variants": [
            {"color": "Ocean Blue", "size": "Free Size", "stock": 40},
            {"color": "Matte Black", "size": "Free Size", "stock": 33},
        ],
    },
    {
        "name": "Ceramic Table Lamp",
        "description": "Hand-glazed ceramic base with a linen shade.",
        "price": 58.5,
        "category": "Home",
        "tags": ["lighting", "ceramic"],
        "variants": [{"color": "Sand", "size": "Free Size", "stock": 6}],
    },
    {
        "name": "Field Guide to Birds",
        "description": "Illustrated guide to over 800 species.",
        "price": 24.99,
        "category": "Books",
        "tags": ["nature", "reference"],
        "variants": [{"color": "Hardcover", "size": "Free Size", "stock": 11}],
    },
    {
        "name": "Canvas Tote Bag",
        "description": "Heavy canvas tote with an inner zip pocket.",
        "price": 22.0,
        "category": "Accessories",
        "tags": ["canvas", "bag"],
        "variants": [
            {"color": "Natural", "size": "Free Size", "stock": 15},
            {"color": "Red", "size": "Free Size", "stock": 3},
        ],
    },
]


def seed():
    with app.app_context():
        db.create_all()
        if Product.query.first():
            print("Products already exist — skipping seed.")
            return

        for item in SAMPLE_PRODUCTS:
            product = create_product(item)
            skus = ", ".join(v.sku for v in product.variants)
            print(f"  Created {product.id}: {product.name} [{skus}]")

        print(f"\nSeeded {len(SAMPLE_PRODUCTS)} products.")


if __name__ == "__main__":
    seed()
