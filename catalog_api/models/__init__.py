from catalog_api.models.product import Product
from catalog_api.models.variant import Variant
from catalog_api.models.student import Student
from catalog_api.models.account import Account

__all__ = ["Product", "Variant", "Student", "Account"]
