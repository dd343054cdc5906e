from models.regions import Region
from models.restaurant_tables import RestaurantTable
from models.table_sessions import SessionStatus, TableSession
from models.table_session_items import TableSessionItem
from models.products import Product

__all__ = [
    "Region",
    "RestaurantTable",
    "SessionStatus",
    "TableSession",
    "TableSessionItem",
    "Product",
]
