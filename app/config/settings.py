import os
from dotenv import load_dotenv
from pathlib import Path

# Carrega o .env manualmente se estiver fora do Docker
if not os.getenv("RUNNING_IN_DOCKER"):
    dotenv_path = Path(__file__).resolve().parents[2] / ".env"
    load_dotenv(dotenv_path=dotenv_path)

# Configuração de conexão (Postgres)
DB_CONFIG = {
    'database': os.getenv('DB_NAME'),
    'user': os.getenv('DB_USER'),
    'password': os.getenv('DB_PASSWORD'),
    'host': os.getenv('DB_HOST'),
    'port': int(os.getenv('DB_PORT', 5432)),
}

# SSL do banco (opcional)
DB_SSL_MODE = os.getenv('DB_SSL_MODE')  # ex.: require, verify-ca, verify-full

# URL explícita tem prioridade; sem ela usa DB_* e, por último, SQLite local
DATABASE_URL = os.getenv("DATABASE_URL")

# CORS
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "").split(",") if o.strip()]
CORS_ALLOW_ALL = os.getenv("CORS_ALLOW_ALL", "false").lower() in ("1", "true", "yes")

# FastAPI / App
BASE_URL = os.getenv("BASE_URL", "")
ENABLE_DOCS = os.getenv("ENABLE_DOCS", "true").lower() in ("1", "true", "yes")

# URL pública usada nos postbacks dos gateways (webhooks)
PUBLIC_BASE_URL = os.getenv("PUBLIC_BASE_URL", BASE_URL).rstrip("/")

# Gateways PIX
PAYEVO_API_URL = os.getenv("PAYEVO_API_URL", "https://apiv2.payevo.com.br/functions/v1")
PIX_GATEWAY_TIMEOUT_SECONDS = float(os.getenv("PIX_GATEWAY_TIMEOUT_SECONDS", 5))
PIX_EXPIRACAO_MINUTOS = int(os.getenv("PIX_EXPIRACAO_MINUTOS", 5))

# Carrinho (persistência chave/valor)
CARRINHO_STORAGE_KEY = os.getenv("CARRINHO_STORAGE_KEY", "churrascaria-cart")
CARRINHO_STORAGE_DIR = os.getenv(
    "CARRINHO_STORAGE_DIR",
    str(Path(__file__).resolve().parents[1] / "storage" / "carrinhos"),
)
