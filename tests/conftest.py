import json
from decimal import Decimal

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.main import app
from app.database.db_connection import get_db
from app.database.init_db import criar_tabelas
from app.api.pagamentos.services.dependencies import get_http_transport
from app.api.pedidos.models.model_pedido import PedidoModel
from app.api.configuracoes.models.model_configuracao_loja import ConfiguracaoLojaModel
from app.api.entregas.models.model_zona_entrega import ZonaEntregaModel


class GatewayFake:
    """Servidor falso para os gateways PIX via httpx.MockTransport."""

    def __init__(self):
        self.requests = []
        self.respostas = {}
        self.transport = httpx.MockTransport(self._handle)

    def responder(self, method, path, status_code=200, json=None, erro=None):
        self.respostas[(method, path)] = (status_code, json, erro)

    def corpo(self, indice=-1):
        return json.loads(self.requests[indice].content)

    def hosts(self):
        return [r.url.host for r in self.requests]

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code, body, erro = self.respostas.get(
            (request.method, request.url.path),
            (404, {"message": "not mocked"}, None),
        )
        if erro is not None:
            raise erro("falha simulada", request=request)
        return httpx.Response(status_code, json=body)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    criar_tabelas(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    SessionTest = sessionmaker(bind=engine, autocommit=False, autoflush=False)
    session = SessionTest()
    yield session
    session.close()


@pytest.fixture
def gateway_fake():
    return GatewayFake()


@pytest.fixture
def client(db, gateway_fake):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_http_transport] = lambda: gateway_fake.transport
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def criar_pedido(db):
    def _criar(**kwargs):
        dados = {
            "customer_name": "Ana Souza",
            "customer_phone": "11987654321",
            "subtotal": Decimal("65.00"),
            "delivery_fee": Decimal("8.00"),
            "total": Decimal("73.00"),
        }
        dados.update(kwargs)
        pedido = PedidoModel(**dados)
        db.add(pedido)
        db.commit()
        db.refresh(pedido)
        return pedido

    return _criar


@pytest.fixture
def criar_configuracao(db):
    def _criar(**kwargs):
        config = ConfiguracaoLojaModel(store_name="Churrascaria", **kwargs)
        db.add(config)
        db.commit()
        return config

    return _criar


@pytest.fixture
def criar_zona(db):
    def _criar(inicio, fim, taxa, tempo, **kwargs):
        zona = ZonaEntregaModel(
            zip_code_start=inicio,
            zip_code_end=fim,
            delivery_fee=Decimal(taxa),
            delivery_time=tempo,
            **kwargs,
        )
        db.add(zona)
        db.commit()
        return zona

    return _criar
