"""Reference creation requests (MULTIBANCO and PayShop)."""
import logging
from typing import Any, Dict, Mapping

from .core.exceptions import InvalidClientError
from .handlers import Callback, complete, error_handler, response_handler
from .providers.base import ReferenceProvider

logger = logging.getLogger(__name__)

# Request defaults
REFERENCE_DEFAULTS: Dict[str, Any] = {
    "origin": "",
    "additionalInfo": "",
    "name": "",
    "address": "",
    "postCode": "",
    "city": "",
    "NIC": "",
    "externalReference": "",
    "contactPhone": "",
    "IDUserBackoffice": -1,
    "timeLimitDays": -1,
    "sendEmailBuyer": False,
}


def build_payload(options: Mapping[str, Any], defaults: Mapping[str, Any] = REFERENCE_DEFAULTS) -> Dict[str, Any]:
    """Merge ``options`` over ``defaults``, leaving out callables."""
    payload = dict(defaults)
    payload.update(options)
    return {key: value for key, value in payload.items() if not callable(value)}


async def get_reference(
    method: str,
    client: ReferenceProvider,
    options: Mapping[str, Any],
    on_success: Callback = None,
    on_fail: Callback = None
) -> Any:
    """
    Create a payment reference through the remote ``method``.
    
    Fields missing from ``options`` take the values in ``REFERENCE_DEFAULTS``.
    Returns the remote response, or ``None`` when the call failed.
    """
    try:
        if not isinstance(client, ReferenceProvider):
            raise InvalidClientError(client)
        
        pending = client.call(method, build_payload(options))
    except Exception as ex:
        error_handler(ex, on_fail)
        return None
    
    logger.debug(f"[CF] Requesting reference via {method}")
    return await complete(pending, response_handler(on_success, on_fail))
