"""
SOAP Reference Provider - Integração REAL com o webservice Compra Fácil.

O envelope SOAP, o parsing do WSDL e o transporte HTTP ficam a cargo do
zeep (AsyncClient sobre httpx). Este módulo apenas constrói a ligação e
converte as respostas em dicts simples.
"""
import asyncio
import logging
from typing import Optional, Dict, Any

import httpx
from zeep import AsyncClient, Settings as ZeepSettings
from zeep.helpers import serialize_object
from zeep.transports import AsyncTransport

from ..core.config import Settings, get_settings
from ..models import ConnectionOptions
from .base import ReferenceProvider

logger = logging.getLogger(__name__)


class SoapReferenceProvider(ReferenceProvider):
    """
    Provider ligado ao serviço SOAP real.
    
    Guarda o cliente zeep, o proxy de serviço (opcionalmente apontado para
    outro endpoint) e as opções extra com que foi construído. É só de
    leitura depois de criado.
    """
    
    def __init__(
        self,
        client: AsyncClient,
        transport: AsyncTransport,
        endpoint: Optional[str] = None,
        options: Optional[Dict[str, Any]] = None
    ):
        self.client = client
        self.transport = transport
        self.endpoint = endpoint
        self.options = options or {}
        self.service = _bind_service(client, endpoint)
    
    @property
    def name(self) -> str:
        return "CompraFacilSOAP"
    
    async def call(self, method: str, payload: Dict[str, Any]) -> Any:
        """Executa o método remoto e devolve a resposta serializada."""
        operation = self.service[method]
        
        logger.debug(f"[CF] Calling {method}")
        result = await operation(**payload)
        
        return serialize_object(result, dict)
    
    async def aclose(self):
        """Fecha os clientes HTTP do transporte (chamadas e WSDL)."""
        await self.transport.aclose()
        self.transport.wsdl_client.close()


def _bind_service(client: AsyncClient, endpoint: Optional[str]):
    """Proxy do serviço, usando o endpoint indicado quando existe."""
    if not endpoint:
        return client.service
    
    # Binding da primeira porta do primeiro serviço do WSDL
    service = next(iter(client.wsdl.services.values()))
    port = next(iter(service.ports.values()))
    
    return client.create_service(port.binding.name.text, endpoint)


def create_soap_provider(
    connection: ConnectionOptions,
    settings: Optional[Settings] = None
) -> SoapReferenceProvider:
    """
    Cria a ligação SOAP a partir do WSDL.
    
    Bloqueia enquanto o WSDL é descarregado e interpretado; a fachada
    corre esta função numa thread.
    
    Args:
        connection: WSDL, endpoint, headers e opções extra do zeep
        settings: Timeouts do transporte (por omissão, os do ambiente)
        
    Returns:
        SoapReferenceProvider pronto a usar
    """
    settings = settings or get_settings()
    
    transport = AsyncTransport(
        client=httpx.AsyncClient(timeout=settings.operation_timeout),
        wsdl_client=httpx.Client(timeout=settings.timeout)
    )

    # AsyncTransport resets the client headers to its own User-Agent
    transport.client.headers.update(connection.headers)
    transport.wsdl_client.headers.update(connection.headers)

    try:
        client = AsyncClient(
            connection.wsdl,
            transport=transport,
            settings=ZeepSettings(**connection.extra)
        )
        provider = SoapReferenceProvider(
            client,
            transport,
            endpoint=connection.endpoint,
            options=connection.extra
        )
    except Exception:
        # Runs in a worker thread, outside any event loop
        transport.wsdl_client.close()
        asyncio.run(transport.client.aclose())
        raise
    
    logger.info(f"[CF] SOAP client created from {connection.wsdl}")
    
    return provider
