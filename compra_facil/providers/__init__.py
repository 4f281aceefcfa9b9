"""Reference Providers Package."""
from .base import ReferenceProvider
from .mock_provider import MockReferenceProvider
from .soap_provider import SoapReferenceProvider, create_soap_provider

__all__ = [
    "ReferenceProvider",
    "MockReferenceProvider",
    "SoapReferenceProvider",
    "create_soap_provider"
]
