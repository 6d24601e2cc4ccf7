"""Product catalog endpoints, including nested variant routes."""
from flask import request

from catalog_api.blueprints.api import api_bp
from catalog_api.blueprints.api.envelope import json_body, ok, ok_list, ok_page
from catalog_api.services import product_service


@api_bp.route("/products", methods=["POST"])
def create_product():
    product = product_service.create_product(json_body(request))
    return ok(product.to_dict(), "Product created successfully", status=201)


@api_bp.route("/products", methods=["GET"])
def list_products():
    filters = {
        "category": request.args.get("category"),
        "minPrice": request.args.get("minPrice"),
        "maxPrice": request.args.get("maxPrice"),
        "inStock": request.args.get("inStock"),
    }
    result = product_service.list_products(
        filters,
        page=request.args.get("page"),
        limit=request.args.get("limit"),
    )
    return ok_page(result)


@api_bp.route("/products/stats")
def product_statistics():
    return ok(product_service.get_statistics())


@api_bp.route("/products/search")
def search_products():
    term = request.args.get("q")
    products = product_service.search_products(term)
    return ok_list(products, searchTerm=term)


@api_bp.route("/products/category/<category>")
def products_by_category(category):
    products = product_service.get_products_by_category(category)
    return ok_list(products, category=category)


@api_bp.route("/products/by-color/<color>")
def products_by_color(color):
    products = product_service.get_products_by_color(color)
    return ok_list(products, color=color)


@api_bp.route("/products/<product_id>", methods=["GET"])
def get_product(product_id):
    return ok(product_service.get_product(product_id).to_dict())


@api_bp.route("/products/<product_id>", methods=["PUT"])
def update_product(product_id):
    product = product_service.update_product(product_id, json_body(request))
    return ok(product.to_dict(), "Product updated successfully")


@api_bp.route("/products/<product_id>", methods=["DELETE"])
def delete_product(product_id):
    product = product_service.soft_delete_product(product_id)
    return ok(product.to_dict(), "Product deleted successfully")


@api_bp.route("/products/<product_id>/variants", methods=["POST"])
def add_variant(product_id):
    product = product_service.add_variant(product_id, json_body(request))
    return ok(product.to_dict(), "Variant added successfully")


@api_bp.route("/products/<product_id>/variants/<variant_id>/stock", methods=["PUT"])
def update_variant_stock(product_id, variant_id):
    body = json_body(request)
    stock = body.get("stock") if isinstance(body, dict) else None
    product = product_service.update_variant_stock(product_id, variant_id, stock)
    return ok(product.to_dict(), "Variant stock updated successfully")


@api_bp.route("/products/<product_id>/variants/<variant_id>", methods=["DELETE"])
def remove_variant(product_id, variant_id):
    product = product_service.remove_variant(product_id, variant_id)
    return ok(product.to_dict(), "Variant removed successfully")
