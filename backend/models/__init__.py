from models.product import Product, utc_timestamp
from models.user import SessionUser

__all__ = ["Product", "SessionUser", "utc_timestamp"]
