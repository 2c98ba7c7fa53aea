from __future__ import annotations

import base64
from typing import Any, Dict, Optional

import httpx

from app.api.pagamentos.contracts.pix_gateway_contract import (
    ClientePix,
    CobrancaPix,
    EventoWebhook,
    IPixGatewayContract,
    StatusTransacao,
)
from app.api.shared.schemas.schema_shared_enums import PagamentoGatewayEnum
from app.config.settings import (
    PAYEVO_API_URL,
    PIX_EXPIRACAO_MINUTOS,
    PIX_GATEWAY_TIMEOUT_SECONDS,
)
from app.core.exceptions import GatewayNaoConfiguradoError, RespostaGatewayInvalidaError
from app.integrations.pix_http_client import PixHttpClient, como_dict, extrair_status
from app.utils.database_utils import expiracao_iso
from app.utils.logger import logger

STATUS_PAGO = "paid"


def basic_auth(secret_key: str) -> str:
    """Payevo usa Basic Auth com a secret key como usuário e `x` como senha."""
    token = base64.b64encode(f"{secret_key}:x".encode()).decode()
    return f"Basic {token}"


class PayevoClient(PixHttpClient, IPixGatewayContract):
    """Cliente da API Payevo (transações PIX com postback)."""

    nome = "Payevo"
    gateway = PagamentoGatewayEnum.PAYEVO

    def __init__(
        self,
        *,
        secret_key: str,
        base_url: str = PAYEVO_API_URL,
        postback_url: Optional[str] = None,
        timeout: float = PIX_GATEWAY_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not secret_key:
            raise GatewayNaoConfiguradoError("Payevo not configured")

        self.postback_url = postback_url
        super().__init__(
            base_url=base_url,
            headers={"Authorization": basic_auth(secret_key)},
            timeout=timeout,
            transport=transport,
        )

    async def criar_cobranca(
        self,
        *,
        pedido_id: str,
        valor_centavos: int,
        descricao: str,
        cliente: ClientePix,
    ) -> CobrancaPix:
        payload: Dict[str, Any] = {
            "paymentMethod": "PIX",
            "amount": valor_centavos,
            "customer": {
                "name": cliente.name,
                "email": cliente.email or "",
                "phone": cliente.phone,
            },
            "items": [
                {
                    "title": descricao,
                    "unitPrice": valor_centavos,
                    "quantity": 1,
                    "externalRef": pedido_id,
                },
            ],
            "pix": {"expirationMinutes": PIX_EXPIRACAO_MINUTOS},
            "metadata": {"orderId": pedido_id},
        }
        if self.postback_url:
            payload["postbackUrl"] = self.postback_url
        if cliente.document:
            payload["customer"]["document"] = cliente.document

        logger.info(f"[Payevo] Criando transação pedido_id={pedido_id} amount={valor_centavos}")

        data = await self._request("POST", "/transactions", json=payload)

        transacao = como_dict(data.get("transaction"))
        pix = como_dict(data.get("pix"))
        transaction_id = transacao.get("id") or data.get("id")
        qrcode = pix.get("qrcode") or data.get("qrcode")
        expiracao = pix.get("expirationDate") or data.get("expirationDate")

        if not transaction_id or not qrcode:
            logger.error(f"[Payevo] Resposta inválida: {data}")
            raise RespostaGatewayInvalidaError("Invalid Payevo response", details=data)

        return CobrancaPix(
            transaction_id=str(transaction_id),
            qrcode=qrcode,
            expiration_date=expiracao or expiracao_iso(PIX_EXPIRACAO_MINUTOS),
            status=extrair_status(data),
            gateway=self.gateway,
            raw=data,
        )

    async def consultar_status(self, transaction_id: str) -> StatusTransacao:
        data = await self._request("GET", f"/transactions/{transaction_id}")
        status = extrair_status(data)
        logger.info(f"[Payevo] Status transaction_id={transaction_id} status={status}")
        return StatusTransacao(
            transaction_id=transaction_id,
            status=status,
            pago=str(status or "").lower() == STATUS_PAGO,
            raw=data,
        )

    @staticmethod
    def interpretar_webhook(payload: Dict[str, Any]) -> EventoWebhook:
        # Payevo envia { data: { id, status, ... } }, às vezes sem o envelope
        data = como_dict(payload.get("data")) or payload
        transaction_id = data.get("id")
        status = data.get("status")
        return EventoWebhook(
            transaction_id=str(transaction_id) if transaction_id else None,
            status=status,
            relevante=status == STATUS_PAGO,
        )
