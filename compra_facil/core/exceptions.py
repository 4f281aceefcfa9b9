"""Exceptions raised while preparing Compra Fácil requests."""


class CompraFacilException(Exception):
    """Base exception for the Compra Fácil client."""
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ConfigurationError(CompraFacilException):
    """Missing or invalid client configuration."""
    def __init__(self, message: str = "No WSDL location configured"):
        super().__init__(message)


class InvalidClientError(CompraFacilException):
    """Object used as client handle is not a reference provider."""
    def __init__(self, client: object):
        super().__init__(f"Invalid client handle: {type(client).__name__}")
