"""
Operações puras do carrinho.

Cada função recebe a lista atual de itens e devolve uma NOVA lista; nenhuma
delas toca em storage. A identidade de uma linha é o par
(produto.id, variante.id ou ``SEM_VARIANTE``).
"""
from __future__ import annotations

from decimal import Decimal
from typing import List, Optional, Tuple

from app.api.carrinho.schemas.schema_carrinho import (
    ItemCarrinho,
    ProdutoCarrinho,
    VarianteProduto,
)

SEM_VARIANTE = "no-variant"


def chave_item(item: ItemCarrinho) -> Tuple[str, str]:
    return item.produto.id, (item.variante.id if item.variante else SEM_VARIANTE)


def _casa(item: ItemCarrinho, produto_id: str, variante_id: Optional[str]) -> bool:
    if item.produto.id != produto_id:
        return False
    # Sem variante informada: casa com todas as linhas do produto
    if not variante_id:
        return True
    return chave_item(item)[1] == variante_id


def adicionar_item(
    itens: List[ItemCarrinho],
    produto: ProdutoCarrinho,
    quantidade: int = 1,
    observacao: Optional[str] = None,
    variante: Optional[VarianteProduto] = None,
) -> List[ItemCarrinho]:
    chave = (produto.id, variante.id if variante else SEM_VARIANTE)

    novos: List[ItemCarrinho] = []
    encontrado = False
    for item in itens:
        if not encontrado and chave_item(item) == chave:
            encontrado = True
            nova_quantidade = item.quantidade + quantidade
            # Soma que zera (ou fica negativa) tira a linha do carrinho
            if nova_quantidade <= 0:
                continue
            update = {"quantidade": nova_quantidade}
            if observacao:
                update["observacao"] = observacao
            novos.append(item.model_copy(update=update))
        else:
            novos.append(item)

    if not encontrado and quantidade > 0:
        novos.append(
            ItemCarrinho(
                produto=produto,
                quantidade=quantidade,
                observacao=observacao,
                variante=variante,
            )
        )
    return novos


def remover_item(
    itens: List[ItemCarrinho],
    produto_id: str,
    variante_id: Optional[str] = None,
) -> List[ItemCarrinho]:
    """
    Com ``variante_id`` remove só aquela linha; sem ele remove TODAS as linhas
    do produto, qualquer que seja a variante.
    """
    return [item for item in itens if not _casa(item, produto_id, variante_id)]


def atualizar_quantidade(
    itens: List[ItemCarrinho],
    produto_id: str,
    quantidade: int,
    variante_id: Optional[str] = None,
) -> List[ItemCarrinho]:
    if quantidade <= 0:
        return remover_item(itens, produto_id, variante_id)

    return [
        item.model_copy(update={"quantidade": quantidade})
        if _casa(item, produto_id, variante_id)
        else item
        for item in itens
    ]


def _dec(valor) -> Decimal:
    if isinstance(valor, Decimal):
        return valor
    return Decimal(str(valor))


def contar_itens(itens: List[ItemCarrinho]) -> int:
    return sum(item.quantidade for item in itens)


def calcular_subtotal(itens: List[ItemCarrinho]) -> Decimal:
    return sum((item.total for item in itens), Decimal("0"))


def calcular_total(
    itens: List[ItemCarrinho],
    taxa_entrega: Decimal | int | float = 0,
    desconto: Decimal | int | float = 0,
) -> Decimal:
    # Sem piso em zero: desconto maior que subtotal + taxa gera total negativo
    return calcular_subtotal(itens) + _dec(taxa_entrega) - _dec(desconto)
