from decimal import Decimal

from sqlalchemy.orm import Session

from app.api.carrinho.core import operacoes
from app.api.entregas.services.service_taxa_entrega import TaxaEntregaService
from app.api.pedidos.schemas.schema_cotacao import CotacaoPedidoRequest, CotacaoPedidoResponse
from app.utils.logger import logger


class CotacaoPedidoService:
    """Recalcula no servidor o total que o storefront exibe (itens + frete - desconto)."""

    def __init__(self, db: Session):
        self.taxas = TaxaEntregaService(db)

    def cotar(self, payload: CotacaoPedidoRequest) -> CotacaoPedidoResponse:
        entrega = None
        taxa_entrega = Decimal("0")
        if payload.cep:
            entrega = self.taxas.calcular(payload.cep)
            # CEP fora de área não vira frete grátis: quem chama decide bloquear
            taxa_entrega = entrega.fee if entrega.found else Decimal("0")

        subtotal = operacoes.calcular_subtotal(payload.itens)
        total = operacoes.calcular_total(payload.itens, taxa_entrega, payload.desconto)
        logger.info(f"[Cotacao] subtotal={subtotal} taxa={taxa_entrega} total={total}")

        return CotacaoPedidoResponse(
            subtotal=subtotal,
            taxa_entrega=taxa_entrega,
            desconto=payload.desconto,
            total=total,
            quantidade_itens=operacoes.contar_itens(payload.itens),
            entrega=entrega,
        )
