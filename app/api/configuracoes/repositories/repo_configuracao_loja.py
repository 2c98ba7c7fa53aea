from typing import Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.configuracoes.models.model_configuracao_loja import ConfiguracaoLojaModel
from app.core.exceptions import PersistenciaError
from app.utils.logger import logger


class ConfiguracaoLojaRepository:
    def __init__(self, db: Session):
        self.db = db

    def obter(self) -> Optional[ConfiguracaoLojaModel]:
        """Loja única: devolve o primeiro registro de configurações."""
        try:
            return self.db.query(ConfiguracaoLojaModel).order_by(ConfiguracaoLojaModel.created_at.asc()).first()
        except SQLAlchemyError as e:
            logger.error(f"[Configuracoes] Erro ao buscar store_settings: {e}")
            raise PersistenciaError("Failed to fetch gateway settings") from e
