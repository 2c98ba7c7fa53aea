import uuid

from sqlalchemy import Column, String, DateTime, Numeric, Boolean, Text, Index
from app.database.db_connection import Base
from app.api.shared.schemas.schema_shared_enums import (
    PagamentoMetodoEnum,
    PagamentoStatusEnum,
    PedidoStatusEnum,
)
from app.utils.database_utils import now_trimmed


class PedidoModel(Base):
    __tablename__ = "orders"
    __table_args__ = (
        Index("idx_orders_payevo_tx", "payevo_transaction_id"),
        Index("idx_orders_hypepay_tx", "hypepay_transaction_id"),
    )

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    customer_name = Column(String(150), nullable=False)
    customer_phone = Column(String(30), nullable=False)
    customer_email = Column(String(150), nullable=True)

    delivery_address = Column(Text, nullable=True)
    is_pickup = Column(Boolean, nullable=False, default=False)

    subtotal = Column(Numeric(10, 2), nullable=False, default=0)
    delivery_fee = Column(Numeric(10, 2), nullable=False, default=0)
    discount = Column(Numeric(10, 2), nullable=False, default=0)
    total = Column(Numeric(10, 2), nullable=False, default=0)

    status = Column(String(30), nullable=False, default=PedidoStatusEnum.PENDENTE.value)
    payment_status = Column(String(20), nullable=False, default=PagamentoStatusEnum.PENDENTE.value)
    payment_method = Column(String(30), nullable=False, default=PagamentoMetodoEnum.PIX.value)

    # Um id de transação por gateway; a coluna usada depende de quem gerou a cobrança
    payevo_transaction_id = Column(String(120), nullable=True)
    hypepay_transaction_id = Column(String(120), nullable=True)
    payment_gateway = Column(String(20), nullable=True)
    pix_qrcode = Column(Text, nullable=True)
    pix_expiration = Column(String(40), nullable=True)

    notes = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=now_trimmed, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_trimmed, onupdate=now_trimmed, nullable=False)
