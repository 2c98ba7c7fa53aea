from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.api.shared.schemas.schema_shared_enums import PagamentoGatewayEnum


class ClienteCobrancaRequest(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    document: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class CobrancaPixRequest(BaseModel):
    """
    Pedido de criação de cobrança PIX. Os campos são opcionais no schema para
    que a ausência vire 400 (`Missing required fields`) e não 422.
    """
    order_id: Optional[str] = Field(None, alias="orderId")
    amount: Optional[Decimal] = Field(None, description="Valor em reais (unidades maiores)")
    description: Optional[str] = None
    base_url: Optional[str] = Field(None, alias="baseUrl")
    api_key: Optional[str] = Field(None, alias="apiKey")
    customer: Optional[ClienteCobrancaRequest] = None

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class CobrancaPixResponse(BaseModel):
    success: bool = True
    transaction_id: str = Field(..., alias="transactionId")
    qrcode: str
    expiration_date: Optional[str] = Field(None, alias="expirationDate")
    status: Optional[str] = None
    gateway: PagamentoGatewayEnum

    model_config = ConfigDict(populate_by_name=True)


class StatusTransacaoResponse(BaseModel):
    transaction_id: str = Field(..., alias="transactionId")
    status: Optional[str] = None
    data: Dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(populate_by_name=True)


class WebhookResponse(BaseModel):
    received: bool = True
    order_id: Optional[str] = Field(None, alias="orderId")
    message: Optional[str] = None

    model_config = ConfigDict(populate_by_name=True)
