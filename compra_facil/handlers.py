"""
Callback plumbing shared by every remote operation.

Failures always end up in ``error_handler``; completions always go through
the handler built by ``response_handler``.
"""
import logging
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

Callback = Optional[Callable[[Any], Any]]


def error_handler(err: Any, on_fail: Callback = None) -> None:
    """Pass ``err`` to ``on_fail`` when it is callable, otherwise drop it."""
    if callable(on_fail):
        logger.debug(f"[CF] Request failed: {err!r}")
        on_fail(err)
    else:
        logger.warning(f"[CF] Request failed with no failure callback: {err!r}")


def response_handler(on_success: Callback = None, on_fail: Callback = None) -> Callable[[Any, Any], Any]:
    """
    Build a completion handler with the ``(err, result)`` convention.
    
    The handler invokes exactly one of the callbacks: ``on_fail`` when ``err``
    is set, ``on_success`` otherwise. It returns ``result`` on success and
    ``None`` on failure.
    """
    def handler(err: Any, result: Any = None) -> Any:
        if err is not None:
            error_handler(err, on_fail)
            return None
        
        if callable(on_success):
            on_success(result)
        return result
    
    return handler


async def complete(pending: Awaitable[Any], handler: Callable[[Any, Any], Any]) -> Any:
    """Await a remote call and route its outcome through ``handler``."""
    try:
        result = await pending
    except Exception as ex:
        return handler(ex)
    
    return handler(None, result)
