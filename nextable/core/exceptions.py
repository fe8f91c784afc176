from typing import Any, Optional


class ServiceError(Exception):
    """Base class for errors raised by the service layer."""
    status_code = 500
    code = "server_error"

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class BadRequestError(ServiceError):
    status_code = 400
    code = "bad_request"


class AuthenticationError(ServiceError):
    status_code = 401
    code = "unauthorized"


class PermissionDeniedError(ServiceError):
    status_code = 403
    code = "forbidden"


class NotFoundError(ServiceError):
    status_code = 404
    code = "not_found"


class ConflictError(ServiceError):
    status_code = 409
    code = "conflict"


# ----------- Order placement failures -----------

class OrderPlacementError(ServiceError):
    """An order could not be placed. Nothing was written."""
    status_code = 400
    code = "order_rejected"


class EmptyItemList(OrderPlacementError):
    def __init__(self):
        super().__init__("Order must contain at least one item.")


class InvalidLineItem(OrderPlacementError):
    """A line request has a bad quantity or references an unorderable menu item."""

    def __init__(self, message: str, menu_item_id: Any = None, quantity: Any = None):
        super().__init__(message, details={"menu_item_id": menu_item_id, "quantity": quantity})
        self.menu_item_id = menu_item_id
        self.quantity = quantity


class TableMismatch(OrderPlacementError):
    def __init__(self, table_id: Any, restaurant_id: Any):
        super().__init__(
            f"Table {table_id} does not belong to restaurant {restaurant_id}.",
            details={"table_id": table_id},
        )
        self.table_id = table_id


class TransactionFailure(OrderPlacementError):
    status_code = 503
    code = "order_failed"
