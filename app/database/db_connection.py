# app/database/db_connection.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from app.config.settings import DATABASE_URL, DB_CONFIG, DB_SSL_MODE
from app.utils.logger import logger

# Base única para todos os models
Base = declarative_base()


def montar_url_conexao() -> str:
    if DATABASE_URL:
        return DATABASE_URL

    missing = [k for k in ('database', 'user', 'password', 'host') if not DB_CONFIG.get(k)]
    if missing:
        logger.warning(
            "[DB] Variáveis do Postgres ausentes (%s); usando SQLite local",
            ", ".join(missing),
        )
        return "sqlite:///./pedidos_pix.db"

    # SSL opcional via query
    ssl_query = f"?sslmode={DB_SSL_MODE}" if DB_SSL_MODE else ""
    return (
        f"postgresql://{DB_CONFIG['user']}:{DB_CONFIG['password']}"
        f"@{DB_CONFIG['host']}:{DB_CONFIG['port']}/{DB_CONFIG['database']}{ssl_query}"
    )


connection_string = montar_url_conexao()

if connection_string.startswith("sqlite"):
    connect_args = {"check_same_thread": False}
else:
    connect_args = {"options": "-c timezone=America/Sao_Paulo"}

engine = create_engine(
    connection_string,
    pool_pre_ping=True,
    connect_args=connect_args,
)

SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# Dependency para FastAPI
def get_db():
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()
