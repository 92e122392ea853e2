#import all models so SQLAlchemy registers them on Base.metadata

from orderflow.data.models.product import ProductModel
from orderflow.data.models.cart import CartModel
from orderflow.data.models.cart_item import CartItemModel
from orderflow.data.models.order import OrderModel
from orderflow.data.models.order_item import OrderItemModel

__all__ = ["ProductModel", "CartModel", "CartItemModel", "OrderModel", "OrderItemModel"]
