from __future__ import annotations

from typing import Any, Dict

import httpx

from app.api.pagamentos.contracts.pix_gateway_contract import (
    ClientePix,
    CobrancaPix,
    EventoWebhook,
    IPixGatewayContract,
    StatusTransacao,
)
from app.api.shared.schemas.schema_shared_enums import PagamentoGatewayEnum
from app.config.settings import PIX_EXPIRACAO_MINUTOS, PIX_GATEWAY_TIMEOUT_SECONDS
from app.core.exceptions import GatewayNaoConfiguradoError, RespostaGatewayInvalidaError
from app.integrations.pix_http_client import PixHttpClient, extrair_status
from app.utils.database_utils import expiracao_iso
from app.utils.logger import logger

EVENTO_PAGAMENTO_RECEBIDO = "PAYMENT_RECEIVED"
STATUS_PAGO = "PAID"


class HypepayClient(PixHttpClient, IPixGatewayContract):
    """Cliente da API Hypepay (autenticação por header `x-api-key`)."""

    nome = "Hypepay"
    gateway = PagamentoGatewayEnum.HYPEPAY

    def __init__(
        self,
        *,
        api_key: str,
        base_url: str,
        timeout: float = PIX_GATEWAY_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not api_key or not base_url:
            raise GatewayNaoConfiguradoError("Hypepay not configured")

        super().__init__(
            base_url=base_url,
            headers={"x-api-key": api_key, "Accept": "application/json"},
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
        payload = {
            "amount": valor_centavos,
            "description": descricao,
            "customer": {
                "name": cliente.name,
                "email": cliente.email or "",
                "document": cliente.document or "",
                "phone": cliente.phone,
            },
        }
        logger.info(f"[Hypepay] Criando transação pedido_id={pedido_id} amount={valor_centavos}")

        data = await self._request("POST", "/api/v1/transactions", json=payload)

        transaction_id = data.get("transactionId")
        qr_code = data.get("qr_code")
        if not transaction_id or not qr_code:
            logger.error(f"[Hypepay] Resposta inválida: {data}")
            raise RespostaGatewayInvalidaError("Invalid Hypepay response", details=data)

        # Hypepay não informa expiração
        return CobrancaPix(
            transaction_id=str(transaction_id),
            qrcode=qr_code,
            expiration_date=expiracao_iso(PIX_EXPIRACAO_MINUTOS),
            status=data.get("status"),
            gateway=self.gateway,
            raw=data,
        )

    async def consultar_status(self, transaction_id: str) -> StatusTransacao:
        data = await self._request("GET", f"/api/v1/transactions/{transaction_id}")
        status = extrair_status(data)
        return StatusTransacao(
            transaction_id=transaction_id,
            status=status,
            pago=str(status or "").upper() == STATUS_PAGO,
            raw=data,
        )

    @staticmethod
    def interpretar_webhook(payload: Dict[str, Any]) -> EventoWebhook:
        evento = payload.get("event")
        status = payload.get("status")
        transaction_id = payload.get("transactionId")
        return EventoWebhook(
            transaction_id=str(transaction_id) if transaction_id else None,
            status=status,
            relevante=(evento == EVENTO_PAGAMENTO_RECEBIDO and status == STATUS_PAGO),
        )
