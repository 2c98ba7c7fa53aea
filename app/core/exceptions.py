"""
Taxonomia de erros do fluxo de pagamento PIX.

Cada erro carrega o status HTTP com que deve ser respondido; o handler global
em `app.core.exception_handlers` converte para `{"error": ..., "details": ...}`.
"""
from __future__ import annotations

from typing import Any, Optional


class PagamentoError(Exception):
    status_code: int = 500
    error: str = "Internal server error"

    def __init__(self, error: Optional[str] = None, *, details: Any = None, status_code: Optional[int] = None):
        self.error = error or self.error
        self.details = details
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.error)


class CobrancaInvalidaError(PagamentoError):
    """Campos obrigatórios ausentes/inválidos. Detectado antes de qualquer chamada externa."""
    status_code = 400
    error = "Missing required fields"


class GatewayNaoConfiguradoError(PagamentoError):
    status_code = 500
    error = "Gateway not configured"


class GatewayRejeitouError(PagamentoError):
    """Gateway respondeu com status != 2xx; `details` traz o corpo bruto."""
    status_code = 502
    error = "Gateway API error"


class RespostaGatewayInvalidaError(PagamentoError):
    """HTTP 2xx mas sem transactionId ou payload PIX."""
    status_code = 502
    error = "Invalid gateway response"


class GatewayIndisponivelError(PagamentoError):
    """Timeout ou erro de rede ao falar com o gateway."""
    status_code = 502
    error = "Gateway unavailable"


class NenhumGatewayDisponivelError(PagamentoError):
    status_code = 503
    error = "No gateway available"


class PedidoNaoEncontradoError(PagamentoError):
    status_code = 404
    error = "Order not found"


class PersistenciaError(PagamentoError):
    status_code = 500
    error = "Database error"
