from storefront.models.base import Base
from storefront.models.user import User
from storefront.models.item import Item
from storefront.models.cart_item import CartItem
from storefront.models.order import Order, OrderItem
