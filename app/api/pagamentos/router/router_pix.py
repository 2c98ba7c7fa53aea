from fastapi import APIRouter, Body, Depends, status

from app.api.pagamentos.contracts.pix_gateway_contract import CobrancaPix
from app.api.pagamentos.schemas.schema_cobranca_pix import CobrancaPixRequest, CobrancaPixResponse
from app.api.pagamentos.services.dependencies import get_pix_service
from app.api.pagamentos.services.service_pix import PixPagamentoService
from app.api.shared.schemas.schema_shared_enums import PagamentoGatewayEnum
from app.utils.logger import logger

router = APIRouter(prefix="/api/pagamentos/public", tags=["Public - Pagamentos PIX"])


def _to_response(cobranca: CobrancaPix) -> CobrancaPixResponse:
    return CobrancaPixResponse(
        success=True,
        transaction_id=cobranca.transaction_id,
        qrcode=cobranca.qrcode,
        expiration_date=cobranca.expiration_date,
        status=cobranca.status,
        gateway=cobranca.gateway,
    )


@router.post("/pix", response_model=CobrancaPixResponse, status_code=status.HTTP_200_OK)
async def criar_pix(
    payload: CobrancaPixRequest = Body(...),
    svc: PixPagamentoService = Depends(get_pix_service),
):
    """
    Cria a cobrança PIX no gateway principal da loja, caindo para o secundário
    quando o principal falha. Sem nenhum gateway disponível responde 503.
    """
    logger.info(f"[PIX] Criar cobrança (fallback) pedido_id={payload.order_id}")
    return _to_response(await svc.criar_cobranca_com_fallback(payload))


@router.post("/{gateway}/pix", response_model=CobrancaPixResponse, status_code=status.HTTP_200_OK)
async def criar_pix_gateway(
    gateway: PagamentoGatewayEnum,
    payload: CobrancaPixRequest = Body(...),
    svc: PixPagamentoService = Depends(get_pix_service),
):
    logger.info(f"[PIX] Criar cobrança gateway={gateway.value} pedido_id={payload.order_id}")
    return _to_response(await svc.criar_cobranca(gateway, payload))
