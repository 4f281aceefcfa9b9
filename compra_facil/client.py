"""
Compra Fácil client facade.

Every operation is a coroutine that performs a single request/response round
trip and reports the outcome through optional ``on_success``/``on_fail``
callbacks. Failures, whether raised while preparing the request or by the
remote call, only ever reach ``on_fail``.
"""
import asyncio
import logging
import re
from typing import Any, Callable, Dict, Mapping, Optional

from .core.config import Settings, get_settings
from .core.exceptions import ConfigurationError, InvalidClientError
from .handlers import Callback, complete, error_handler, response_handler
from .models import ConnectionOptions, format_date
from .providers.base import (
    ReferenceProvider,
    REFERENCE_MB,
    REFERENCE_MB_PRODUCT,
    REFERENCE_PS,
    REFERENCE_PS_PRODUCT,
    INFO,
    INFO_REFERENCE
)
from .providers.soap_provider import create_soap_provider
from .references import build_payload, get_reference

logger = logging.getLogger(__name__)

# Non-empty segments of a ';' separated list
DELIMITER = re.compile(r"[^;]+")


def parse_references(ids: Optional[str], references: Optional[str]) -> Dict[str, str]:
    """
    Pair the ``IDsList`` and ``referencesList`` fields of a getInfo response.

    Both lists are split on ``;`` with empty segments dropped and then zipped
    by position, so an empty segment in only one of them shifts every later
    pair. Trailing entries of the longer list are ignored.
    """
    return dict(zip(DELIMITER.findall(ids or ""), DELIMITER.findall(references or "")))


def references_info(resp: Mapping[str, Any]) -> Dict[str, Any]:
    """Build the list_references result from a raw getInfo response."""
    return {
        "references": parse_references(resp.get("IDsList"), resp.get("referencesList")),
        "success": resp.get("GetReferencesInfoResult"),
        "error": resp.get("error"),
        "raw": resp,
    }


def _require_client(client: Any) -> ReferenceProvider:
    if not isinstance(client, ReferenceProvider):
        raise InvalidClientError(client)
    return client


class CompraFacil:
    """
    Client for the Compra Fácil payment reference service.

    Holds no session state: the handle returned by ``init`` is passed to
    every other operation and may be shared between concurrent calls.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        provider_factory: Callable[..., ReferenceProvider] = create_soap_provider
    ):
        self.settings = settings or get_settings()
        self.provider_factory = provider_factory

    # ===========================================
    # CONNECTION
    # ===========================================

    async def init(
        self,
        options: Mapping[str, Any],
        on_success: Callback = None,
        on_fail: Callback = None
    ) -> Optional[ReferenceProvider]:
        """
        Create a client handle from a WSDL location.

        Args:
            options: ``wsdl``, and optionally ``endpoint`` (overrides the
                service address in the WSDL), ``headers`` (HTTP headers sent
                with every request) and ``extra`` (zeep Settings options)
            on_success: Receives the client handle
            on_fail: Receives the exception when the WSDL can't be loaded

        Returns:
            The client handle, or None on failure
        """
        try:
            connection = self._connection_options(options)
            pending = asyncio.to_thread(self.provider_factory, connection, self.settings)
        except Exception as ex:
            error_handler(ex, on_fail)
            return None

        return await complete(pending, response_handler(on_success, on_fail))

    def _connection_options(self, options: Mapping[str, Any]) -> ConnectionOptions:
        data = dict(options)
        data.setdefault("wsdl", self.settings.wsdl_url)
        data.setdefault("endpoint", self.settings.endpoint)

        if not data["wsdl"]:
            raise ConfigurationError()

        return ConnectionOptions(**{key: value for key, value in data.items() if value is not None})

    def _credentials(self) -> Dict[str, Any]:
        credentials = {}
        if self.settings.username is not None:
            credentials["username"] = self.settings.username
        if self.settings.password is not None:
            credentials["password"] = self.settings.password
        return credentials

    # ===========================================
    # QUERIES
    # ===========================================

    async def list_references(
        self,
        client: ReferenceProvider,
        options: Mapping[str, Any],
        on_success: Callback = None,
        on_fail: Callback = None
    ) -> Optional[Dict[str, Any]]:
        """
        List references paid or created between two dates (remote getInfo).

        ``options`` carries username, password, dateStart, dateEnd and the
        mode flag. Dates may be given as ``datetime`` or already formatted as
        ``DD-MM-YYYY HH:MM:SS``.

        The result maps each reference ID to its reference and also carries
        the remote success flag, the error field and the raw response.
        """
        try:
            payload = build_payload(options, self._credentials())
            for key in ("dateStart", "dateEnd"):
                if key in payload:
                    payload[key] = format_date(payload[key])

            pending = _require_client(client).call(INFO, payload)
        except Exception as ex:
            error_handler(ex, on_fail)
            return None

        handler = response_handler(on_success, on_fail)

        def parse(err: Any, resp: Any = None) -> Any:
            if err is not None:
                return handler(err)
            try:
                if resp is not None and not isinstance(resp, Mapping):
                    raise TypeError(f"Unexpected getInfo response: {type(resp).__name__}")
                result = references_info(resp or {})
            except Exception as ex:
                return handler(ex)
            return handler(None, result)

        return await complete(pending, parse)

    async def get_reference_status(
        self,
        client: ReferenceProvider,
        options: Mapping[str, Any],
        on_success: Callback = None,
        on_fail: Callback = None
    ) -> Optional[Dict[str, Any]]:
        """
        Look up the payment state of one reference (remote getInfoReference).

        The response fields (paid, status, lastPaymentDate, totalPayments,
        error and the success flag) are passed through unchanged.
        """
        try:
            payload = build_payload(options, self._credentials())
            pending = _require_client(client).call(INFO_REFERENCE, payload)
        except Exception as ex:
            error_handler(ex, on_fail)
            return None

        return await complete(pending, response_handler(on_success, on_fail))

    # ===========================================
    # REFERENCE CREATION
    # ===========================================

    async def _create(
        self,
        method: str,
        client: ReferenceProvider,
        options: Mapping[str, Any],
        on_success: Callback,
        on_fail: Callback
    ) -> Optional[Dict[str, Any]]:
        try:
            options = {**self._credentials(), **options}
        except Exception as ex:
            error_handler(ex, on_fail)
            return None

        return await get_reference(method, client, options, on_success, on_fail)

    async def create_reference_by_amount(
        self,
        client: ReferenceProvider,
        options: Mapping[str, Any],
        on_success: Callback = None,
        on_fail: Callback = None
    ) -> Optional[Dict[str, Any]]:
        """
        MULTIBANCO reference for ``amount`` (remote getReferenceMB).

        Args:
            client: Handle returned by ``init``
            options: Request fields; optional ones default as in REFERENCE_DEFAULTS
            on_success: Receives the remote response
            on_fail: Receives the exception when the call fails

        Returns:
            The remote response, or None on failure
        """
        return await self._create(REFERENCE_MB, client, options, on_success, on_fail)

    async def create_reference_by_product_id(
        self,
        client: ReferenceProvider,
        options: Mapping[str, Any],
        on_success: Callback = None,
        on_fail: Callback = None
    ) -> Optional[Dict[str, Any]]:
        """
        MULTIBANCO reference for ``productID`` x ``quantity`` (remote getReferenceMB2).

        Takes the same arguments and returns the same shape as
        ``create_reference_by_amount``.
        """
        return await self._create(REFERENCE_MB_PRODUCT, client, options, on_success, on_fail)

    async def create_payshop_reference_by_amount(
        self,
        client: ReferenceProvider,
        options: Mapping[str, Any],
        on_success: Callback = None,
        on_fail: Callback = None
    ) -> Optional[Dict[str, Any]]:
        """
        PayShop reference for ``amount`` (remote getReferencePS).

        Takes the same arguments and returns the same shape as
        ``create_reference_by_amount``.
        """
        return await self._create(REFERENCE_PS, client, options, on_success, on_fail)

    async def create_payshop_reference_by_product_id(
        self,
        client: ReferenceProvider,
        options: Mapping[str, Any],
        on_success: Callback = None,
        on_fail: Callback = None
    ) -> Optional[Dict[str, Any]]:
        """
        PayShop reference for ``productID`` x ``quantity`` (remote getReferencePS2).

        Takes the same arguments and returns the same shape as
        ``create_reference_by_amount``.
        """
        return await self._create(REFERENCE_PS_PRODUCT, client, options, on_success, on_fail)


def compra_facil(settings: Optional[Settings] = None) -> CompraFacil:
    """Return a new client facade."""
    return CompraFacil(settings)
