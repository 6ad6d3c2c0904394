"""
Error taxonomy shared by repositories, the checkout service and the routes.

Every error carries the HTTP status it maps to. 5xx errors carry a generic
public message; the underlying cause is only logged.
"""


class ShopError(Exception):
    status_code = 500
    public_message = None

    def __init__(self, message: str = "Unexpected error"):
        super().__init__(message)
        self.message = message

    @property
    def detail(self) -> str:
        return self.public_message or self.message


class NotFoundError(ShopError):
    """A referenced entity (buyer, cart, product, cart item...) is missing."""

    status_code = 404

    def __init__(self, entity: str, message: str = None):
        super().__init__(message or f"{entity} not found")
        self.entity = entity


class InvalidDataError(ShopError):
    status_code = 400


class ConflictError(ShopError):
    status_code = 409


class UnavailableError(ShopError):
    """Storage timed out or the connection failed. Safe to retry."""

    status_code = 500
    public_message = "Service temporarily unavailable"


class InternalError(ShopError):
    status_code = 500
    public_message = "Internal server error"
