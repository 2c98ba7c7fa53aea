from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ProdutoCarrinho(BaseModel):
    """Recorte do produto do catálogo necessário para precificar o carrinho."""
    id: str
    nome: str = Field(..., alias="name")
    preco: Decimal = Field(..., alias="price")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class VarianteProduto(BaseModel):
    id: str
    nome: str = Field(..., alias="name")
    preco: Decimal = Field(..., alias="price")
    imagem_url: Optional[str] = Field(None, alias="image_url")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ItemCarrinho(BaseModel):
    produto: ProdutoCarrinho = Field(..., alias="product")
    quantidade: int = Field(..., ge=1, alias="quantity")
    observacao: Optional[str] = Field(None, alias="notes")
    variante: Optional[VarianteProduto] = Field(None, alias="selectedVariant")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    @property
    def preco_unitario(self) -> Decimal:
        # Preço da variante substitui o do produto (nunca soma)
        if self.variante is not None:
            return self.variante.preco
        return self.produto.preco

    @property
    def total(self) -> Decimal:
        return self.preco_unitario * self.quantidade
