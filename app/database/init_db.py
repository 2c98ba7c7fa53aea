from app.database.db_connection import engine, Base
from app.utils.logger import logger


def importar_models() -> None:
    # Registra os models no metadata antes do create_all
    from app.api.pedidos.models.model_pedido import PedidoModel  # noqa: F401
    from app.api.configuracoes.models.model_configuracao_loja import ConfiguracaoLojaModel  # noqa: F401
    from app.api.entregas.models.model_zona_entrega import ZonaEntregaModel  # noqa: F401


def criar_tabelas(bind=None) -> None:
    importar_models()
    Base.metadata.create_all(bind=bind or engine)


def inicializar_banco() -> None:
    logger.info("[DB] Criando tabelas (se necessário)...")
    try:
        criar_tabelas()
    except Exception as e:
        logger.error(f"[DB] Erro ao criar tabelas: {e}")
        raise
    logger.info("[DB] Banco inicializado.")
