from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.api.carrinho.schemas.schema_carrinho import ItemCarrinho
from app.api.entregas.schemas.schema_zona_entrega import TaxaEntregaResponse


class CotacaoPedidoRequest(BaseModel):
    itens: List[ItemCarrinho] = Field(default_factory=list)
    cep: Optional[str] = Field(None, description="Omitido para retirada no local")
    desconto: Decimal = Decimal("0")

    model_config = ConfigDict(extra="forbid")


class CotacaoPedidoResponse(BaseModel):
    subtotal: Decimal
    taxa_entrega: Decimal
    desconto: Decimal
    total: Decimal
    quantidade_itens: int
    entrega: Optional[TaxaEntregaResponse] = None
