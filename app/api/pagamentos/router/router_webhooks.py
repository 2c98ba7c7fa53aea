from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, status

from app.api.pagamentos.schemas.schema_cobranca_pix import WebhookResponse
from app.api.pagamentos.services.dependencies import get_pix_service
from app.api.pagamentos.services.service_pix import PixPagamentoService
from app.api.shared.schemas.schema_shared_enums import PagamentoGatewayEnum
from app.utils.logger import logger

router = APIRouter(
    prefix="/api/pagamentos/public/webhooks",
    tags=["Public - Pagamentos PIX Webhooks"],
)


@router.get("/{gateway}", status_code=status.HTTP_200_OK)
async def webhook_healthcheck(gateway: PagamentoGatewayEnum) -> Dict[str, str]:
    """Endpoint simples para verificação pelo gateway."""
    return {"status": "ok"}


@router.post(
    "/{gateway}",
    response_model=WebhookResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_200_OK,
)
def receber_webhook(
    gateway: PagamentoGatewayEnum,
    payload: Dict[str, Any] = Body(...),
    svc: PixPagamentoService = Depends(get_pix_service),
):
    """
    Recebe notificações de pagamento.

    - Eventos que não sejam "pagamento recebido" são confirmados (200) sem efeito.
    - 404 quando nenhum pedido tem o transactionId; 500 em falha de banco, para
      que o gateway reenvie a notificação.
    """
    logger.info(f"[{gateway.value.capitalize()}][Webhook] Recebido: {payload}")
    return svc.processar_webhook(gateway, payload)
