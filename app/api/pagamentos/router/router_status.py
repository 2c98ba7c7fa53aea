from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.api.pagamentos.schemas.schema_cobranca_pix import StatusTransacaoResponse
from app.api.pagamentos.services.dependencies import get_pix_service
from app.api.pagamentos.services.service_pix import PixPagamentoService
from app.api.shared.schemas.schema_shared_enums import PagamentoGatewayEnum

router = APIRouter(prefix="/api/pagamentos/public", tags=["Public - Pagamentos PIX"])


@router.get("/{gateway}/status", response_model=StatusTransacaoResponse, status_code=status.HTTP_200_OK)
async def consultar_status(
    gateway: PagamentoGatewayEnum,
    transaction_id: Optional[str] = Query(None, alias="transactionId"),
    svc: PixPagamentoService = Depends(get_pix_service),
):
    """Polling do cliente. Quando o gateway informa `paid`, o pedido é confirmado."""
    resultado = await svc.consultar_status(gateway, transaction_id)
    return StatusTransacaoResponse(
        transaction_id=resultado.transaction_id,
        status=resultado.status,
        data=resultado.raw,
    )
