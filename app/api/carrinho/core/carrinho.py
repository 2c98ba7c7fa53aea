from __future__ import annotations

import json
from decimal import Decimal
from typing import List, Optional

from pydantic import TypeAdapter, ValidationError

from app.api.carrinho.contracts.carrinho_storage_contract import ICarrinhoStorage
from app.api.carrinho.core import operacoes
from app.api.carrinho.schemas.schema_carrinho import (
    ItemCarrinho,
    ProdutoCarrinho,
    VarianteProduto,
)
from app.config.settings import CARRINHO_STORAGE_KEY
from app.utils.logger import logger

_itens_adapter = TypeAdapter(List[ItemCarrinho])


class Carrinho:
    """
    Carrinho persistente.

    A lista de itens é recalculada pelas funções puras de `operacoes` e, a cada
    mutação, gravada inteira no storage (write-through). Falha de gravação é
    apenas logada: o estado em memória continua valendo.
    """

    def __init__(self, storage: ICarrinhoStorage, chave: str = CARRINHO_STORAGE_KEY):
        self.storage = storage
        self.chave = chave
        self.itens: List[ItemCarrinho] = self._restaurar()

    # ---------------- Persistência ----------------
    def _restaurar(self) -> List[ItemCarrinho]:
        try:
            bruto = self.storage.carregar(self.chave)
        except (OSError, ValueError) as e:
            # ValueError cobre UnicodeDecodeError de arquivo com bytes inválidos
            logger.warning(f"[Carrinho] Falha ao ler storage chave={self.chave}: {e}")
            return []
        if not bruto:
            return []
        try:
            return _itens_adapter.validate_json(bruto)
        except (ValidationError, ValueError) as e:
            logger.warning(f"[Carrinho] Conteúdo inválido descartado chave={self.chave}: {e}")
            return []

    def _persistir(self) -> None:
        dados = _itens_adapter.dump_python(self.itens, mode="json", by_alias=True)
        try:
            self.storage.salvar(self.chave, json.dumps(dados, ensure_ascii=False))
        except Exception as e:
            logger.error(f"[Carrinho] Falha ao persistir chave={self.chave}: {e}")

    def _aplicar(self, itens: List[ItemCarrinho]) -> None:
        self.itens = itens
        self._persistir()

    # ---------------- Mutações ----------------
    def adicionar(
        self,
        produto: ProdutoCarrinho,
        quantidade: int = 1,
        observacao: Optional[str] = None,
        variante: Optional[VarianteProduto] = None,
    ) -> None:
        self._aplicar(operacoes.adicionar_item(self.itens, produto, quantidade, observacao, variante))

    def remover(self, produto_id: str, variante_id: Optional[str] = None) -> None:
        self._aplicar(operacoes.remover_item(self.itens, produto_id, variante_id))

    def atualizar_quantidade(
        self,
        produto_id: str,
        quantidade: int,
        variante_id: Optional[str] = None,
    ) -> None:
        self._aplicar(operacoes.atualizar_quantidade(self.itens, produto_id, quantidade, variante_id))

    def limpar(self) -> None:
        self.itens = []
        try:
            self.storage.remover(self.chave)
        except Exception as e:
            logger.error(f"[Carrinho] Falha ao remover chave={self.chave}: {e}")

    # ---------------- Consultas ----------------
    def quantidade_total(self) -> int:
        return operacoes.contar_itens(self.itens)

    def subtotal(self) -> Decimal:
        return operacoes.calcular_subtotal(self.itens)

    def total(self, taxa_entrega: Decimal | int | float = 0, desconto: Decimal | int | float = 0) -> Decimal:
        return operacoes.calcular_total(self.itens, taxa_entrega, desconto)
