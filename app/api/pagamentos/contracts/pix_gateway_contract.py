from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from app.api.shared.schemas.schema_shared_enums import PagamentoGatewayEnum


@dataclass(slots=True)
class ClientePix:
    name: str
    phone: str
    email: str = ""
    document: str = ""


@dataclass(slots=True)
class CobrancaPix:
    """Cobrança PIX pendente, já normalizada (independe do gateway)."""

    transaction_id: str
    qrcode: str
    expiration_date: str
    status: Optional[str]
    gateway: PagamentoGatewayEnum
    raw: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class StatusTransacao:
    transaction_id: str
    status: Optional[str]
    pago: bool
    raw: Dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class EventoWebhook:
    """`relevante` só é True para a combinação evento/status de pagamento recebido."""

    transaction_id: Optional[str]
    status: Optional[str]
    relevante: bool


class IPixGatewayContract(ABC):
    """Contrato comum dos gateways PIX (criação de cobrança, status e webhook)."""

    gateway: PagamentoGatewayEnum

    @abstractmethod
    async def criar_cobranca(
        self,
        *,
        pedido_id: str,
        valor_centavos: int,
        descricao: str,
        cliente: ClientePix,
    ) -> CobrancaPix:
        raise NotImplementedError

    @abstractmethod
    async def consultar_status(self, transaction_id: str) -> StatusTransacao:
        raise NotImplementedError

    @staticmethod
    @abstractmethod
    def interpretar_webhook(payload: Dict[str, Any]) -> EventoWebhook:
        raise NotImplementedError
