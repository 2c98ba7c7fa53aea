from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session

from app.api.pedidos.schemas.schema_cotacao import CotacaoPedidoRequest, CotacaoPedidoResponse
from app.api.pedidos.services.service_cotacao import CotacaoPedidoService
from app.database.db_connection import get_db

router = APIRouter(prefix="/api/pedidos/public", tags=["Public - Pedidos"])


@router.post("/cotacao", response_model=CotacaoPedidoResponse, status_code=status.HTTP_200_OK)
def cotar_pedido(
    payload: CotacaoPedidoRequest = Body(...),
    db: Session = Depends(get_db),
):
    """
    Calcula subtotal, taxa de entrega e total do carrinho.

    - Variante selecionada substitui o preço base do produto.
    - `entrega.found=false` indica CEP não atendido (taxa fica 0, não é frete grátis).
    - O total não é limitado a zero quando o desconto excede subtotal + taxa.
    """
    return CotacaoPedidoService(db).cotar(payload)
