from __future__ import annotations

from typing import Any, Dict, List, Optional

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.configuracoes.models.model_configuracao_loja import ConfiguracaoLojaModel
from app.api.configuracoes.repositories.repo_configuracao_loja import ConfiguracaoLojaRepository
from app.api.pagamentos.contracts.pix_gateway_contract import (
    ClientePix,
    CobrancaPix,
    IPixGatewayContract,
    StatusTransacao,
)
from app.api.pagamentos.schemas.schema_cobranca_pix import CobrancaPixRequest, WebhookResponse
from app.api.pedidos.repositories.repo_pedidos import PedidoRepository
from app.api.pedidos.services.service_confirmacao_pagamento import ConfirmacaoPagamentoService
from app.api.shared.schemas.schema_shared_enums import PagamentoGatewayEnum
from app.config.settings import PUBLIC_BASE_URL
from app.core.exceptions import (
    CobrancaInvalidaError,
    GatewayIndisponivelError,
    GatewayNaoConfiguradoError,
    GatewayRejeitouError,
    NenhumGatewayDisponivelError,
    PersistenciaError,
    RespostaGatewayInvalidaError,
)
from app.integrations.hypepay.client import HypepayClient
from app.integrations.payevo.client import PayevoClient
from app.integrations.pix_http_client import valor_em_centavos
from app.utils.digitos import limpar_telefone
from app.utils.logger import logger

WEBHOOK_PATH = "/api/pagamentos/public/webhooks/{gateway}"

CLIENTES_GATEWAY = {
    PagamentoGatewayEnum.PAYEVO: PayevoClient,
    PagamentoGatewayEnum.HYPEPAY: HypepayClient,
}

# Falhas do gateway que permitem tentar o próximo no fallback
FALHAS_GATEWAY = (GatewayRejeitouError, RespostaGatewayInvalidaError, GatewayIndisponivelError)


def descricao_padrao(pedido_id: str) -> str:
    return f"Pedido #{pedido_id[:8].upper()}"


def ordem_gateways(primary_gateway: Optional[str]) -> List[PagamentoGatewayEnum]:
    if (primary_gateway or "").lower() == PagamentoGatewayEnum.HYPEPAY.value:
        return [PagamentoGatewayEnum.HYPEPAY, PagamentoGatewayEnum.PAYEVO]
    return [PagamentoGatewayEnum.PAYEVO, PagamentoGatewayEnum.HYPEPAY]


class PixPagamentoService:
    """Orquestra cobranças PIX, consultas de status e webhooks dos gateways."""

    def __init__(
        self,
        db: Session,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.db = db
        self.transport = transport
        self.pedidos = PedidoRepository(db)
        self.configuracoes = ConfiguracaoLojaRepository(db)
        self.confirmacao = ConfirmacaoPagamentoService(db)

    # ---------------- Validação -----------------
    @staticmethod
    def _validar(req: CobrancaPixRequest, *, exige_credenciais_no_corpo: bool = False) -> None:
        customer = req.customer
        faltando = []
        if not req.order_id:
            faltando.append("orderId")
        if req.amount is None or req.amount <= 0:
            faltando.append("amount")
        if exige_credenciais_no_corpo:
            if not req.base_url:
                faltando.append("baseUrl")
            if not req.api_key:
                faltando.append("apiKey")
        if not customer or not customer.name:
            faltando.append("customer.name")
        if not customer or not limpar_telefone(customer.phone):
            faltando.append("customer.phone")

        if faltando:
            logger.warning(f"[PIX] Cobrança recusada, campos ausentes: {faltando}")
            raise CobrancaInvalidaError("Missing required fields", details={"missing": faltando})

    # ---------------- Gateways -----------------
    def _postback_url(self, gateway: PagamentoGatewayEnum) -> Optional[str]:
        if not PUBLIC_BASE_URL:
            return None
        return PUBLIC_BASE_URL + WEBHOOK_PATH.format(gateway=gateway.value)

    def _configurado(self, gateway: PagamentoGatewayEnum, config: Optional[ConfiguracaoLojaModel]) -> bool:
        if not config:
            return False
        if gateway == PagamentoGatewayEnum.PAYEVO:
            return bool(config.payevo_secret_key)
        return bool(config.hypepay_api_key and config.hypepay_base_url)

    def criar_cliente_gateway(
        self,
        gateway: PagamentoGatewayEnum,
        config: Optional[ConfiguracaoLojaModel],
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ) -> IPixGatewayContract:
        if gateway == PagamentoGatewayEnum.PAYEVO:
            return PayevoClient(
                secret_key=config.payevo_secret_key if config else None,
                postback_url=self._postback_url(gateway),
                transport=self.transport,
            )
        # Credenciais sempre em par: ou as do corpo, ou as da loja
        if not (api_key or base_url) and config:
            api_key, base_url = config.hypepay_api_key, config.hypepay_base_url
        return HypepayClient(
            api_key=api_key,
            base_url=base_url,
            transport=self.transport,
        )

    async def _cobrar(
        self,
        cliente_gateway: IPixGatewayContract,
        req: CobrancaPixRequest,
    ) -> CobrancaPix:
        customer = req.customer
        async with cliente_gateway:
            return await cliente_gateway.criar_cobranca(
                pedido_id=req.order_id,
                valor_centavos=valor_em_centavos(req.amount),
                descricao=req.description or descricao_padrao(req.order_id),
                cliente=ClientePix(
                    name=customer.name,
                    phone=limpar_telefone(customer.phone),
                    email=customer.email or "",
                    document=customer.document or "",
                ),
            )

    def _registrar_cobranca(self, pedido_id: str, cobranca: CobrancaPix) -> None:
        try:
            existe = self.pedidos.registrar_cobranca(
                pedido_id=pedido_id,
                gateway=cobranca.gateway,
                transaction_id=cobranca.transaction_id,
                pix_qrcode=cobranca.qrcode,
                pix_expiration=cobranca.expiration_date,
            )
            self.pedidos.commit()
        except SQLAlchemyError as e:
            self.pedidos.rollback()
            logger.error(f"[PIX] Erro ao gravar cobrança no pedido_id={pedido_id}: {e}")
            raise PersistenciaError("Failed to update order") from e

        if not existe:
            logger.warning(
                f"[PIX] Cobrança {cobranca.transaction_id} criada para pedido inexistente pedido_id={pedido_id}"
            )

    # ---------------- Commands ---------------
    async def criar_cobranca(
        self,
        gateway: PagamentoGatewayEnum,
        req: CobrancaPixRequest,
    ) -> CobrancaPix:
        """Cria a cobrança em um gateway específico, sem fallback."""
        credenciais_no_corpo = gateway == PagamentoGatewayEnum.HYPEPAY and bool(req.base_url or req.api_key)
        if credenciais_no_corpo:
            # baseUrl sem apiKey (ou o inverso) nunca é completado com a chave da loja
            self._validar(req, exige_credenciais_no_corpo=True)
            cliente_gateway = self.criar_cliente_gateway(
                gateway, None, api_key=req.api_key, base_url=req.base_url
            )
        else:
            self._validar(req)
            config = self.configuracoes.obter()
            if gateway == PagamentoGatewayEnum.HYPEPAY and not self._configurado(gateway, config):
                # Hypepay sem credenciais no corpo nem na loja: falta do chamador
                self._validar(req, exige_credenciais_no_corpo=True)
            cliente_gateway = self.criar_cliente_gateway(gateway, config)
        cobranca = await self._cobrar(cliente_gateway, req)
        logger.info(
            f"[PIX] Cobrança criada gateway={gateway.value} pedido_id={req.order_id} "
            f"transaction_id={cobranca.transaction_id}"
        )
        self._registrar_cobranca(req.order_id, cobranca)
        return cobranca

    async def criar_cobranca_com_fallback(self, req: CobrancaPixRequest) -> CobrancaPix:
        """Tenta os gateways configurados, começando pelo `primary_gateway` da loja."""
        self._validar(req)
        config = self.configuracoes.obter()
        ordem = ordem_gateways(config.primary_gateway if config else None)
        logger.info(f"[PIX] Ordem de gateways: {[g.value for g in ordem]}")

        for gateway in ordem:
            if not self._configurado(gateway, config):
                continue
            try:
                cobranca = await self._cobrar(self.criar_cliente_gateway(gateway, config), req)
            except FALHAS_GATEWAY as e:
                logger.warning(f"[PIX] {gateway.value} falhou ({e.error}), tentando próximo...")
                continue
            self._registrar_cobranca(req.order_id, cobranca)
            return cobranca

        logger.error(f"[PIX] Todos os gateways falharam pedido_id={req.order_id}")
        raise NenhumGatewayDisponivelError(
            "No gateway available",
            details="All payment gateways failed. Please use manual PIX.",
        )

    async def consultar_status(
        self,
        gateway: PagamentoGatewayEnum,
        transaction_id: Optional[str],
    ) -> StatusTransacao:
        """Consulta o gateway e, se pago, aplica a confirmação do pedido."""
        if not transaction_id:
            raise CobrancaInvalidaError("Missing transactionId parameter")

        config = self.configuracoes.obter()
        if not self._configurado(gateway, config):
            raise GatewayNaoConfiguradoError(f"{gateway.value.capitalize()} not configured")

        async with self.criar_cliente_gateway(gateway, config) as cliente_gateway:
            status = await cliente_gateway.consultar_status(transaction_id)

        if status.pago:
            self.confirmacao.confirmar_pagamento(gateway=gateway, transaction_id=transaction_id)
        return status

    def processar_webhook(
        self,
        gateway: PagamentoGatewayEnum,
        payload: Dict[str, Any],
    ) -> WebhookResponse:
        tag = f"[{gateway.value.capitalize()}][Webhook]"
        evento = CLIENTES_GATEWAY[gateway].interpretar_webhook(payload)

        # Payevo sempre identifica a transação; Hypepay só nos eventos de pagamento
        if gateway == PagamentoGatewayEnum.PAYEVO and not evento.transaction_id:
            logger.error(f"{tag} transactionId ausente payload={payload}")
            raise CobrancaInvalidaError("Missing transactionId")

        if not evento.relevante:
            logger.info(f"{tag} Evento ignorado status={evento.status} payload={payload}")
            return WebhookResponse(received=True)

        if not evento.transaction_id:
            logger.error(f"{tag} transactionId ausente payload={payload}")
            raise CobrancaInvalidaError("Missing transactionId")

        resultado = self.confirmacao.confirmar_pagamento(
            gateway=gateway,
            transaction_id=evento.transaction_id,
        )
        if resultado.ja_processado:
            return WebhookResponse(received=True, order_id=resultado.pedido_id, message="Already processed")
        return WebhookResponse(received=True, order_id=resultado.pedido_id)
