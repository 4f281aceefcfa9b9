"""
Mock Reference Provider - Provider simulado para testes e desenvolvimento.

Este provider simula o webservice Compra Fácil sem fazer chamadas reais.
As respostas têm os mesmos campos que o serviço devolve, incluindo os
erros de negócio (flag de sucesso a False e campo error preenchido).
"""
import logging
import random
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any

from ..models import DATE_FORMAT
from .base import (
    ReferenceProvider,
    REFERENCE_MB,
    REFERENCE_MB_PRODUCT,
    REFERENCE_PS,
    REFERENCE_PS_PRODUCT,
    INFO,
    INFO_REFERENCE
)

logger = logging.getLogger(__name__)

MOCK_ENTITY = "99999"


class MockReferenceProvider(ReferenceProvider):
    """
    Provider simulado para desenvolvimento e testes.
    
    Emite referências MULTIBANCO e PayShop, regista pagamentos e responde
    às consultas de estado e de listagem. Pode ser configurado para
    simular falhas de transporte.
    """
    
    def __init__(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        products: Optional[Dict[str, float]] = None,
        simulate_failures: bool = False,
        failure_rate: float = 0.0
    ):
        self.username = username
        self.password = password
        self.products = products or {}
        self.simulate_failures = simulate_failures
        self.failure_rate = failure_rate
        self.calls: list = []
        self._references: Dict[str, Dict[str, Any]] = {}
        self._next_id = 1
    
    @property
    def name(self) -> str:
        return "MockProvider"
    
    async def call(self, method: str, payload: Dict[str, Any]) -> Any:
        """Simula a chamada ao método remoto."""
        handlers = {
            REFERENCE_MB: self._reference_by_amount,
            REFERENCE_PS: self._reference_by_amount,
            REFERENCE_MB_PRODUCT: self._reference_by_product,
            REFERENCE_PS_PRODUCT: self._reference_by_product,
            INFO_REFERENCE: self._info_reference,
            INFO: self._info,
        }
        if method not in handlers:
            raise AttributeError(f"Service has no operation {method!r}")
        
        logger.info(f"[MOCK] Calling {method}")
        self.calls.append((method, dict(payload)))
        
        # Simular falha se configurado
        if self.simulate_failures and random.random() < self.failure_rate:
            logger.warning(f"[MOCK] Simulated failure for {method}")
            raise ConnectionError("Falha simulada para teste")
        
        if not self._authorized(payload):
            return _rejected(method, "Invalid username or password")
        
        return handlers[method](method, payload)
    
    def register_payment(self, reference: str, paid_at: Optional[datetime] = None):
        """Marca uma referência como paga (para testes)."""
        entry = self._references[reference]
        entry["payments"] += 1
        entry["paid_at"] = paid_at or datetime.now(timezone.utc)
        logger.info(f"[MOCK] Payment registered for {reference}")
    
    def reset(self):
        """Limpa as referências emitidas e o histórico de chamadas."""
        self._references.clear()
        self.calls.clear()
        self._next_id = 1
    
    # ===========================================
    # OPERAÇÕES SIMULADAS
    # ===========================================
    
    def _authorized(self, payload: Dict[str, Any]) -> bool:
        if self.username is not None and payload.get("username") != self.username:
            return False
        if self.password is not None and payload.get("password") != self.password:
            return False
        return True
    
    def _reference_by_amount(self, method: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        return self._issue(method, payload, payload.get("amount"))
    
    def _reference_by_product(self, method: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        price = self.products.get(str(payload.get("productID")))
        if price is None:
            return _rejected(method, "Unknown product")
        
        return self._issue(method, payload, price * int(payload.get("quantity", 1)))
    
    def _issue(self, method: str, payload: Dict[str, Any], amount: Any) -> Dict[str, Any]:
        ref_id = str(self._next_id)
        reference = f"{100000000 + self._next_id}"
        self._next_id += 1
        
        self._references[reference] = {
            "id": ref_id,
            "amount": amount,
            "email": payload.get("email"),
            "created_at": datetime.now(timezone.utc),
            "paid_at": None,
            "payments": 0
        }
        logger.info(f"[MOCK] Reference issued: {reference} ({amount})")
        
        response = {
            f"{method}Result": True,
            "reference": reference,
            "amountOut": amount,
            "error": ""
        }
        
        # PayShop devolve prazo de pagamento em vez de entidade
        if method in (REFERENCE_PS, REFERENCE_PS_PRODUCT):
            days = int(payload.get("timeLimitDays", -1))
            deadline = ""
            if days > 0:
                deadline = (datetime.now(timezone.utc) + timedelta(days=days)).strftime(DATE_FORMAT)
            response["paymentDeadline"] = deadline
        else:
            response["entity"] = MOCK_ENTITY
        
        return response
    
    def _info_reference(self, method: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        entry = self._references.get(str(payload.get("reference")))
        if entry is None:
            return _rejected(method, "Reference not found")
        
        paid_at = entry["paid_at"]
        return {
            f"{method}Result": True,
            "paid": paid_at is not None,
            "status": "Paid" if paid_at else "Pending",
            "lastPaymentDate": paid_at.strftime(DATE_FORMAT) if paid_at else "",
            "totalPayments": entry["payments"],
            "error": ""
        }
    
    def _info(self, method: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Lista todas as referências emitidas (datas e modo são ignorados)."""
        ids = "".join(f"{entry['id']};" for entry in self._references.values())
        refs = "".join(f"{reference};" for reference in self._references)
        
        return {
            "GetReferencesInfoResult": True,
            "IDsList": ids,
            "referencesList": refs,
            "error": ""
        }


def _rejected(method: str, error: str) -> Dict[str, Any]:
    """Resposta de erro de negócio (não é uma falha SOAP)."""
    flag = "GetReferencesInfoResult" if method == INFO else f"{method}Result"
    return {flag: False, "error": error}
