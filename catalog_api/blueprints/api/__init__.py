from flask import Blueprint

api_bp = Blueprint("api", __name__)

from catalog_api.blueprints.api import products, students, accounts  # noqa: F401, E402
