import uuid

from sqlalchemy import Column, String, DateTime, Numeric, Boolean, Integer
from app.database.db_connection import Base
from app.utils.database_utils import now_trimmed


class ZonaEntregaModel(Base):
    """Faixa de CEP atendida, com taxa e tempo estimado de entrega."""
    __tablename__ = "delivery_zones"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))

    zip_code_start = Column(String(9), nullable=False)
    zip_code_end = Column(String(9), nullable=False)
    neighborhood = Column(String(120), nullable=True)
    city = Column(String(120), nullable=True)

    delivery_fee = Column(Numeric(10, 2), nullable=False, default=0)
    delivery_time = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, default=True, nullable=False)

    created_at = Column(DateTime(timezone=True), default=now_trimmed, nullable=False)
