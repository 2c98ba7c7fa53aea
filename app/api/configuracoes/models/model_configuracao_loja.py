import uuid

from sqlalchemy import Column, String, DateTime
from app.database.db_connection import Base
from app.utils.database_utils import now_trimmed


class ConfiguracaoLojaModel(Base):
    """Configurações da loja; aqui interessam só as credenciais dos gateways PIX."""
    __tablename__ = "store_settings"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    store_name = Column(String(120), nullable=False, default="Loja")

    payevo_secret_key = Column(String(255), nullable=True)
    hypepay_api_key = Column(String(255), nullable=True)
    hypepay_base_url = Column(String(255), nullable=True)
    primary_gateway = Column(String(20), nullable=True, default="payevo")

    created_at = Column(DateTime(timezone=True), default=now_trimmed, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=now_trimmed, onupdate=now_trimmed, nullable=False)
