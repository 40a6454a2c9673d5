"""
Domain exceptions raised by the service layer.
Routers translate them into HTTP responses.
"""


class AutoPartsError(Exception):
    """Base exception for the shop backend"""
    def __init__(self, message: str, details: dict = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class CustomerNotFoundError(AutoPartsError):
    pass


class VehicleNotFoundError(AutoPartsError):
    pass


class ProductNotFoundError(AutoPartsError):
    pass


class OrderNotFoundError(AutoPartsError):
    pass


class MissingVehicleError(AutoPartsError):
    """Customer has no vehicles, an order cannot be started"""
    pass


class EmptyOrderError(AutoPartsError):
    """Order has no line items and cannot be finalized"""
    pass


class SpreadsheetReadError(AutoPartsError):
    """Uploaded file is not a readable spreadsheet"""
    pass
