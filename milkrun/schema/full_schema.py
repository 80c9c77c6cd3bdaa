from milkrun.schema.user import Users, UserRole
from milkrun.schema.otp_request import OTPRequest
from milkrun.schema.address import Address
from milkrun.schema.product import Category, Product
from milkrun.schema.cart import Cart
from milkrun.schema.subscription import SubscriptionPlan, SubscriptionStatus, SubscriptionType, UserSubscription
from milkrun.schema.order import Orders, OrderStatus, PaymentStatus, TERMINAL_ORDER_STATUSES

__all__ = [
    "Users", "UserRole", "OTPRequest", "Address", "Category", "Product", "Cart",
    "SubscriptionPlan", "SubscriptionStatus", "SubscriptionType", "UserSubscription",
    "Orders", "OrderStatus", "PaymentStatus", "TERMINAL_ORDER_STATUSES",
]
