"""Asynchronous client for the Compra Fácil MULTIBANCO/PayShop reference service."""
from .client import CompraFacil, compra_facil, parse_references
from .core.config import Settings, get_settings
from .core.exceptions import CompraFacilException, ConfigurationError, InvalidClientError
from .handlers import error_handler, response_handler
from .models import ConnectionOptions, format_date
from .providers import MockReferenceProvider, ReferenceProvider, SoapReferenceProvider
from .references import REFERENCE_DEFAULTS, get_reference

__all__ = [
    "CompraFacil",
    "compra_facil",
    "parse_references",
    "Settings",
    "get_settings",
    "CompraFacilException",
    "ConfigurationError",
    "InvalidClientError",
    "error_handler",
    "response_handler",
    "ConnectionOptions",
    "format_date",
    "MockReferenceProvider",
    "ReferenceProvider",
    "SoapReferenceProvider",
    "REFERENCE_DEFAULTS",
    "get_reference",
]
