from __future__ import annotations

from decimal import Decimal
from typing import Iterable, Optional, Union

from sqlalchemy.orm import Session

from app.api.entregas.models.model_zona_entrega import ZonaEntregaModel
from app.api.entregas.repositories.repo_zona_entrega import ZonaEntregaRepository
from app.api.entregas.schemas.schema_zona_entrega import TaxaEntregaResponse, ZonaEntregaOut
from app.utils.digitos import somente_digitos
from app.utils.logger import logger

Zona = Union[ZonaEntregaModel, ZonaEntregaOut]

NAO_ENCONTRADO = TaxaEntregaResponse(found=False, zone=None, fee=Decimal("0"), time=0)


def _faixa_para_int(valor: str) -> Optional[int]:
    digitos = somente_digitos(valor)
    return int(digitos) if digitos else None


def calcular_taxa_entrega(cep: str, zonas: Iterable[Zona]) -> TaxaEntregaResponse:
    """
    Resolve a zona de entrega de um CEP.

    O CEP é reduzido a dígitos e precisa ter exatamente 8; a primeira zona
    (na ordem recebida) cuja faixa [início, fim] contém o valor vence.
    """
    cep_limpo = somente_digitos(cep)
    if len(cep_limpo) != 8:
        return NAO_ENCONTRADO.model_copy()

    cep_num = int(cep_limpo)
    for zona in zonas:
        inicio = _faixa_para_int(zona.zip_code_start)
        fim = _faixa_para_int(zona.zip_code_end)
        if inicio is None or fim is None:
            continue
        if inicio <= cep_num <= fim:
            return TaxaEntregaResponse(
                found=True,
                zone=ZonaEntregaOut.model_validate(zona),
                fee=Decimal(str(zona.delivery_fee)),
                time=int(zona.delivery_time),
            )

    return NAO_ENCONTRADO.model_copy()


def formatar_cep(valor: str) -> str:
    """Máscara NNNNN-NNN aplicada a partir do 6º dígito; excesso após 8 é descartado."""
    digitos = somente_digitos(valor)[:8]
    if len(digitos) > 5:
        return f"{digitos[:5]}-{digitos[5:]}"
    return digitos


class TaxaEntregaService:
    def __init__(self, db: Session):
        self.repo = ZonaEntregaRepository(db)

    def calcular(self, cep: str) -> TaxaEntregaResponse:
        zonas = self.repo.listar_ativas()
        resultado = calcular_taxa_entrega(cep, zonas)
        if not resultado.found:
            logger.info(f"[Entregas] CEP sem zona atendida cep={formatar_cep(cep)}")
        return resultado
