from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.entregas.schemas.schema_zona_entrega import TaxaEntregaResponse
from app.api.entregas.services.service_taxa_entrega import TaxaEntregaService
from app.database.db_connection import get_db

router = APIRouter(prefix="/api/entregas/public", tags=["Public - Entregas"])


@router.get("/taxa", response_model=TaxaEntregaResponse, status_code=status.HTTP_200_OK)
def consultar_taxa_entrega(
    cep: str = Query(..., description="CEP em qualquer formatação"),
    db: Session = Depends(get_db),
):
    """Taxa e tempo de entrega para o CEP. CEP inválido ou fora das zonas retorna `found=false`."""
    return TaxaEntregaService(db).calcular(cep)
