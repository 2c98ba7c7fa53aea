from __future__ import annotations

from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.api.pedidos.models.model_pedido import PedidoModel
from app.api.shared.schemas.schema_shared_enums import (
    PagamentoGatewayEnum,
    PagamentoStatusEnum,
    PedidoStatusEnum,
)
from app.utils.database_utils import now_trimmed

# Coluna que guarda o id de transação de cada gateway
COLUNA_TRANSACAO = {
    PagamentoGatewayEnum.PAYEVO: PedidoModel.payevo_transaction_id,
    PagamentoGatewayEnum.HYPEPAY: PedidoModel.hypepay_transaction_id,
}


class PedidoRepository:
    """Acesso à tabela `orders`. Erros do SQLAlchemy sobem para o service."""

    def __init__(self, db: Session) -> None:
        self.db = db

    # ---------------- Consultas -----------------
    def get_by_transaction_id(
        self,
        *,
        gateway: PagamentoGatewayEnum,
        transaction_id: str,
    ) -> Optional[PedidoModel]:
        coluna = COLUNA_TRANSACAO[gateway]
        return (
            self.db.query(PedidoModel)
            .filter(coluna == str(transaction_id))
            .order_by(PedidoModel.created_at.desc())
            .first()
        )

    # ---------------- Mutations ------------------
    def registrar_cobranca(
        self,
        *,
        pedido_id: str,
        gateway: PagamentoGatewayEnum,
        transaction_id: str,
        pix_qrcode: str,
        pix_expiration: str | None,
    ) -> bool:
        """Grava os dados da cobrança PIX no pedido. Retorna False se o pedido não existe."""
        valores = {
            COLUNA_TRANSACAO[gateway]: transaction_id,
            PedidoModel.pix_qrcode: pix_qrcode,
            PedidoModel.pix_expiration: pix_expiration,
            PedidoModel.payment_gateway: gateway.value,
            PedidoModel.updated_at: now_trimmed(),
        }
        linhas = (
            self.db.query(PedidoModel)
            .filter(PedidoModel.id == pedido_id)
            .update(valores, synchronize_session=False)
        )
        return linhas > 0

    def marcar_pago_se_pendente(self, pedido_id: str) -> bool:
        """
        UPDATE condicional: só altera se o pedido ainda não está pago.

        Verificação e escrita acontecem no mesmo comando, então duas entregas
        concorrentes do mesmo webhook resultam em uma única transição.
        Retorna True se esta chamada aplicou a transição.
        """
        linhas = (
            self.db.query(PedidoModel)
            .filter(
                PedidoModel.id == pedido_id,
                or_(
                    PedidoModel.payment_status.is_(None),
                    PedidoModel.payment_status != PagamentoStatusEnum.PAGO.value,
                ),
            )
            .update(
                {
                    PedidoModel.payment_status: PagamentoStatusEnum.PAGO.value,
                    PedidoModel.status: PedidoStatusEnum.CONFIRMADO.value,
                    PedidoModel.updated_at: now_trimmed(),
                },
                synchronize_session=False,
            )
        )
        return linhas > 0

    # ---------------- Unidade de trabalho --------
    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()
