from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ZonaEntregaOut(BaseModel):
    id: Optional[str] = None
    zip_code_start: str = Field(..., examples=["01000000"])
    zip_code_end: str = Field(..., examples=["01999999"])
    neighborhood: Optional[str] = None
    city: Optional[str] = None
    delivery_fee: Decimal = Field(..., examples=["8.00"])
    delivery_time: int = Field(..., ge=0, description="Tempo estimado em minutos")
    is_active: bool = True

    model_config = ConfigDict(from_attributes=True)


class TaxaEntregaResponse(BaseModel):
    """Resultado da busca por CEP. `found=false` significa área não atendida, não frete grátis."""
    found: bool
    zone: Optional[ZonaEntregaOut] = None
    fee: Decimal = Decimal("0")
    time: int = 0
