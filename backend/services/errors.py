"""Domain errors raised by the storefront services.

Every error carries the HTTP status and the short machine-readable ``code``
the API returns for it; ``extra`` holds additional response fields.
"""
from typing import Any, Dict, List, Optional


class ShopError(Exception):
    """Base exception for all storefront errors."""

    status_code = 500
    code = "error"

    def __init__(self, message: str, **extra: Any):
        self.message = message
        self.extra: Dict[str, Any] = extra
        super().__init__(message)


class NotFound(ShopError):
    """Raised when an entity id cannot be resolved."""

    status_code = 404
    code = "not_found"


class ProductNotFound(NotFound):
    code = "product_not_found"

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product not found: {product_id}")


class CartLineNotFound(NotFound):
    code = "cart_item_not_found"

    def __init__(self, line_id: int):
        self.line_id = line_id
        super().__init__(f"Cart item not found: {line_id}")


class OrderNotFound(NotFound):
    code = "order_not_found"

    def __init__(self, order_id: int):
        self.order_id = order_id
        super().__init__(f"Order not found: {order_id}")


class ValidationError(ShopError):
    """Raised when a required field is missing or malformed."""

    status_code = 400
    code = "validation_error"

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(message, field=field)


class InvalidQuantity(ShopError):
    status_code = 400
    code = "invalid_quantity"

    def __init__(self, quantity: int):
        self.quantity = quantity
        super().__init__(f"Quantity must be at least 1, got {quantity}")


class EmptyCart(ShopError):
    status_code = 400
    code = "empty_cart"

    def __init__(self):
        super().__init__("Cart is empty")


class InsufficientStock(ShopError):
    """Raised when one or more products cannot cover the requested quantity."""

    status_code = 409
    code = "insufficient_stock"

    def __init__(self, product_ids: List[int]):
        self.product_ids = list(product_ids)
        ids = ", ".join(str(pid) for pid in self.product_ids)
        super().__init__(f"Insufficient stock for product(s): {ids}", product_ids=self.product_ids)


class InvalidTransition(ShopError):
    status_code = 409
    code = "invalid_transition"

    def __init__(self, from_status: str, to_status: str):
        self.from_status = from_status
        self.to_status = to_status
        super().__init__(
            f"Cannot change order status from {from_status} to {to_status}",
            from_status=from_status,
            to_status=to_status,
        )


class Conflict(ShopError):
    """Raised when a write keeps losing to concurrent writers."""

    status_code = 409
    code = "conflict"


class EmailAlreadyRegistered(ShopError):
    status_code = 400
    code = "email_taken"

    def __init__(self, email: str):
        self.email = email
        super().__init__("Email already registered")


class InvalidCredentials(ShopError):
    status_code = 401
    code = "invalid_credentials"

    def __init__(self):
        super().__init__("Invalid credentials")
