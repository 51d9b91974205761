from storefront.schemas.auth import SignupRequest, SigninRequest, ResetRequestIn, ResetRequestOut, ResetPasswordIn, UserOut, MessageOut
from storefront.schemas.users import PermissionsUpdate
from storefront.schemas.items import ItemCreate, ItemUpdate, ItemOut, ItemsPage
from storefront.schemas.cart import CartItemOut, CartOut
from storefront.schemas.orders import CheckoutIn, OrderItemOut, OrderOut
