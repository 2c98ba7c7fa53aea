from typing import List

from sqlalchemy.orm import Session

from app.api.entregas.models.model_zona_entrega import ZonaEntregaModel


class ZonaEntregaRepository:
    def __init__(self, db: Session):
        self.db = db

    def listar_ativas(self) -> List[ZonaEntregaModel]:
        return (
            self.db.query(ZonaEntregaModel)
            .filter(ZonaEntregaModel.is_active.is_(True))
            .order_by(ZonaEntregaModel.zip_code_start.asc())
            .all()
        )
