from enum import Enum


class PedidoStatusEnum(str, Enum):
    PENDENTE = "pending"
    CONFIRMADO = "confirmed"
    EM_PREPARO = "preparing"
    SAIU_PARA_ENTREGA = "out_for_delivery"
    ENTREGUE = "delivered"
    CANCELADO = "cancelled"


class PagamentoStatusEnum(str, Enum):
    PENDENTE = "pending"
    PAGO = "paid"
    FALHOU = "failed"
    ESTORNADO = "refunded"


class PagamentoGatewayEnum(str, Enum):
    PAYEVO = "payevo"
    HYPEPAY = "hypepay"


class PagamentoMetodoEnum(str, Enum):
    PIX = "pix"
    PIX_MANUAL = "pix_manual"
    DINHEIRO = "cash"
    CARTAO = "card"
