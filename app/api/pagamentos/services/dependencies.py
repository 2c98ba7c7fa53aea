from typing import Optional

import httpx
from fastapi import Depends
from sqlalchemy.orm import Session

from app.api.pagamentos.services.service_pix import PixPagamentoService
from app.database.db_connection import get_db


def get_http_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport HTTP dos gateways. None = rede real; os testes sobrescrevem."""
    return None


def get_pix_service(
    db: Session = Depends(get_db),
    transport: Optional[httpx.AsyncBaseTransport] = Depends(get_http_transport),
) -> PixPagamentoService:
    return PixPagamentoService(db, transport=transport)
