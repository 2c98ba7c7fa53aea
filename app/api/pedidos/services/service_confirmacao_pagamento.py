from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.pedidos.repositories.repo_pedidos import PedidoRepository
from app.api.shared.schemas.schema_shared_enums import (
    PagamentoGatewayEnum,
    PagamentoStatusEnum,
)
from app.core.exceptions import PedidoNaoEncontradoError, PersistenciaError
from app.utils.logger import logger


@dataclass(slots=True)
class ResultadoConfirmacao:
    pedido_id: str
    ja_processado: bool


class ConfirmacaoPagamentoService:
    """
    Única porta de entrada para marcar um pedido como pago.

    Webhook e consulta de status convergem aqui. A transição é idempotente:
    pedido já pago vira no-op com sucesso, e a escrita é um UPDATE condicional
    para que entregas concorrentes não apliquem a transição duas vezes.
    """

    def __init__(self, db: Session) -> None:
        self.repo = PedidoRepository(db)

    def confirmar_pagamento(
        self,
        *,
        gateway: PagamentoGatewayEnum,
        transaction_id: str,
    ) -> ResultadoConfirmacao:
        tag = f"[{gateway.value.capitalize()}][Confirmacao]"

        try:
            pedido = self.repo.get_by_transaction_id(gateway=gateway, transaction_id=transaction_id)
        except SQLAlchemyError as e:
            logger.error(f"{tag} Erro ao buscar pedido transaction_id={transaction_id}: {e}")
            raise PersistenciaError("Database error") from e

        if not pedido:
            logger.error(f"{tag} Pedido não encontrado para transaction_id={transaction_id}")
            raise PedidoNaoEncontradoError("Order not found", details={"transactionId": transaction_id})

        if pedido.payment_status == PagamentoStatusEnum.PAGO.value:
            logger.info(f"{tag} Pedido já pago pedido_id={pedido.id}")
            return ResultadoConfirmacao(pedido_id=pedido.id, ja_processado=True)

        try:
            aplicado = self.repo.marcar_pago_se_pendente(pedido.id)
            self.repo.commit()
        except SQLAlchemyError as e:
            self.repo.rollback()
            logger.error(f"{tag} Erro ao atualizar pedido_id={pedido.id}: {e}")
            raise PersistenciaError("Failed to update order") from e

        if not aplicado:
            # Outra entrega (webhook ou polling) confirmou entre a leitura e o UPDATE
            logger.info(f"{tag} Confirmação concorrente já aplicada pedido_id={pedido.id}")
            return ResultadoConfirmacao(pedido_id=pedido.id, ja_processado=True)

        logger.info(f"{tag} Pedido confirmado pedido_id={pedido.id}")
        return ResultadoConfirmacao(pedido_id=pedido.id, ja_processado=False)
