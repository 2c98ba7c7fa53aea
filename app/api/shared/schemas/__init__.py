"""
Schemas compartilhados entre diferentes domínios
"""

from app.api.shared.schemas.schema_shared_enums import (
    PedidoStatusEnum,
    PagamentoStatusEnum,
    PagamentoGatewayEnum,
    PagamentoMetodoEnum,
)

__all__ = [
    "PedidoStatusEnum",
    "PagamentoStatusEnum",
    "PagamentoGatewayEnum",
    "PagamentoMetodoEnum",
]
