"""
Reference Provider Interface - Abstração do serviço de referências.

Este módulo define a interface que o handle de cliente deve implementar.
A fachada só conhece esta interface, o que permite trocar o serviço SOAP
real por uma simulação em desenvolvimento e testes.
"""
from abc import ABC, abstractmethod
from typing import Dict, Any


# Métodos remotos de criação de referências
REFERENCE_MB = "getReferenceMB"
REFERENCE_MB_PRODUCT = "getReferenceMB2"
REFERENCE_PS = "getReferencePS"
REFERENCE_PS_PRODUCT = "getReferencePS2"

# Métodos remotos de consulta
INFO = "getInfo"
INFO_REFERENCE = "getInfoReference"


class ReferenceProvider(ABC):
    """
    Interface abstrata para o serviço de referências de pagamento.
    
    Cada chamada corresponde a um único pedido/resposta ao serviço remoto.
    O provider não guarda estado de sessão e pode ser partilhado entre
    chamadas concorrentes.
    """
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Nome do provider para logs e identificação."""
        pass
    
    @abstractmethod
    async def call(self, method: str, payload: Dict[str, Any]) -> Any:
        """
        Executa um método remoto.
        
        Args:
            method: Nome da operação remota (ex: getReferenceMB)
            payload: Campos do pedido
            
        Returns:
            Resposta do serviço como dict simples
        """
        pass
