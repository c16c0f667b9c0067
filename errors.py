class BasketError(Exception):
    """Base class for basket errors surfaced to API callers."""


class EmptyBasket(BasketError):
    def __init__(self, message="Basket must contain at least one item"):
        super().__init__(message)


class InvalidItem(BasketError):
    def __init__(self, field, message):
        self.field = field
        super().__init__(f"Invalid item {field}: {message}")


class NotFound(BasketError):
    def __init__(self, basket_id):
        self.basket_id = basket_id
        super().__init__(f"Basket {basket_id} not found")


class StoreUnavailable(BasketError):
    def __init__(self, message="Basket store unavailable"):
        super().__init__(message)
