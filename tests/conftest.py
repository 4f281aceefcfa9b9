"""Shared fixtures for the Compra Fácil client tests."""
import pytest

from compra_facil import CompraFacil, MockReferenceProvider, Settings


@pytest.fixture
def settings():
    """Settings isolated from the environment's .env file."""
    return Settings(_env_file=None, wsdl_url=None, endpoint=None, username=None, password=None)


@pytest.fixture
def provider():
    """Mock provider with a small product catalogue."""
    return MockReferenceProvider(
        username="u",
        password="p",
        products={"42": 7.5}
    )


@pytest.fixture
def facade(settings, provider):
    """Facade whose init always yields the mock provider."""
    return CompraFacil(settings, provider_factory=lambda connection, settings: provider)


class Recorder:
    """Collects callback invocations."""

    def __init__(self):
        self.calls = []

    def __call__(self, value):
        self.calls.append(value)


@pytest.fixture
def on_success():
    return Recorder()


@pytest.fixture
def on_fail():
    return Recorder()
