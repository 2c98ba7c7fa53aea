import asyncio
import base64
from decimal import Decimal

import httpx
import pytest

from app.api.pagamentos.contracts.pix_gateway_contract import ClientePix
from app.core.exceptions import (
    GatewayIndisponivelError,
    GatewayNaoConfiguradoError,
    GatewayRejeitouError,
    RespostaGatewayInvalidaError,
)
from app.integrations.hypepay.client import HypepayClient
from app.integrations.payevo.client import PayevoClient, basic_auth
from app.integrations.pix_http_client import valor_em_centavos

HYPEPAY_BASE_URL = "https://api.hypepay.test"
HYPEPAY_PATH = "/api/v1/transactions"
PAYEVO_PATH = "/functions/v1/transactions"

CLIENTE = ClientePix(name="Ana Souza", phone="11987654321", email="ana@example.com")


def _criar(cliente_gateway, valor_centavos=1999):
    async def _run():
        async with cliente_gateway:
            return await cliente_gateway.criar_cobranca(
                pedido_id="3f1c2a9e-0000-4000-8000-000000000001",
                valor_centavos=valor_centavos,
                descricao="Pedido #3F1C2A9E",
                cliente=CLIENTE,
            )

    return asyncio.run(_run())


def _status(cliente_gateway, transaction_id):
    async def _run():
        async with cliente_gateway:
            return await cliente_gateway.consultar_status(transaction_id)

    return asyncio.run(_run())


def _hypepay(gateway_fake):
    return HypepayClient(api_key="hp_key", base_url=HYPEPAY_BASE_URL, transport=gateway_fake.transport)


def _payevo(gateway_fake, **kwargs):
    return PayevoClient(secret_key="sk_test", transport=gateway_fake.transport, **kwargs)


@pytest.mark.parametrize(
    "valor,esperado",
    [
        (Decimal("19.99"), 1999),
        (19.99, 1999),
        (Decimal("10.005"), 1001),
        (Decimal("73"), 7300),
        ("0.1", 10),
    ],
)
def test_valor_em_centavos(valor, esperado):
    assert valor_em_centavos(valor) == esperado


# ---------------- Hypepay ----------------
def test_hypepay_cria_cobranca(gateway_fake):
    gateway_fake.responder(
        "POST", HYPEPAY_PATH,
        json={"transactionId": "hp-1", "qr_code": "00020126PIX", "status": "PENDING"},
    )

    cobranca = _criar(_hypepay(gateway_fake))

    request = gateway_fake.requests[0]
    assert request.headers["x-api-key"] == "hp_key"
    assert gateway_fake.corpo()["amount"] == 1999
    assert gateway_fake.corpo()["customer"]["phone"] == "11987654321"
    assert cobranca.transaction_id == "hp-1"
    assert cobranca.qrcode == "00020126PIX"
    assert cobranca.gateway.value == "hypepay"
    assert cobranca.expiration_date


def test_hypepay_resposta_sem_transaction_id(gateway_fake):
    gateway_fake.responder("POST", HYPEPAY_PATH, json={"qr_code": "00020126PIX"})

    with pytest.raises(RespostaGatewayInvalidaError) as exc:
        _criar(_hypepay(gateway_fake))

    assert exc.value.status_code == 502


def test_hypepay_erro_http_repassa_status_e_corpo(gateway_fake):
    gateway_fake.responder("POST", HYPEPAY_PATH, status_code=422, json={"message": "invalid phone"})

    with pytest.raises(GatewayRejeitouError) as exc:
        _criar(_hypepay(gateway_fake))

    assert exc.value.status_code == 422
    assert exc.value.error == "Hypepay API error"
    assert exc.value.details == {"message": "invalid phone"}


def test_hypepay_timeout(gateway_fake):
    gateway_fake.responder("POST", HYPEPAY_PATH, erro=httpx.ReadTimeout)

    with pytest.raises(GatewayIndisponivelError):
        _criar(_hypepay(gateway_fake))


def test_hypepay_sem_credenciais():
    with pytest.raises(GatewayNaoConfiguradoError):
        HypepayClient(api_key="", base_url=HYPEPAY_BASE_URL)


def test_hypepay_webhook_so_pagamento_recebido_e_relevante():
    pago = HypepayClient.interpretar_webhook(
        {"event": "PAYMENT_RECEIVED", "status": "PAID", "transactionId": "hp-1"}
    )
    criado = HypepayClient.interpretar_webhook(
        {"event": "PAYMENT_CREATED", "status": "PENDING", "transactionId": "hp-1"}
    )

    assert pago.relevante and pago.transaction_id == "hp-1"
    assert not criado.relevante


def test_hypepay_status(gateway_fake):
    gateway_fake.responder("GET", f"{HYPEPAY_PATH}/hp-1", json={"status": "PAID"})

    status = _status(_hypepay(gateway_fake), "hp-1")

    assert status.pago is True


# ---------------- Payevo ----------------
def test_payevo_basic_auth(gateway_fake):
    gateway_fake.responder(
        "POST", PAYEVO_PATH,
        json={"id": "pv-1", "qrcode": "00020126PIX", "status": "waiting_payment"},
    )

    _criar(_payevo(gateway_fake))

    esperado = "Basic " + base64.b64encode(b"sk_test:x").decode()
    assert gateway_fake.requests[0].headers["authorization"] == esperado
    assert basic_auth("sk_test") == esperado


def test_payevo_corpo_da_transacao(gateway_fake):
    gateway_fake.responder("POST", PAYEVO_PATH, json={"id": "pv-1", "qrcode": "00020126PIX"})

    _criar(_payevo(gateway_fake, postback_url="https://loja.test/api/pagamentos/public/webhooks/payevo"))

    corpo = gateway_fake.corpo()
    assert corpo["paymentMethod"] == "PIX"
    assert corpo["amount"] == 1999
    assert corpo["items"][0]["unitPrice"] == 1999
    assert corpo["metadata"] == {"orderId": "3f1c2a9e-0000-4000-8000-000000000001"}
    assert corpo["postbackUrl"].endswith("/webhooks/payevo")


def test_payevo_resposta_aninhada(gateway_fake):
    gateway_fake.responder(
        "POST", PAYEVO_PATH,
        json={
            "transaction": {"id": "pv-2"},
            "pix": {"qrcode": "00020126PIX", "expirationDate": "2026-01-01T12:05:00Z"},
            "status": "waiting_payment",
        },
    )

    cobranca = _criar(_payevo(gateway_fake))

    assert cobranca.transaction_id == "pv-2"
    assert cobranca.expiration_date == "2026-01-01T12:05:00Z"
    assert cobranca.status == "waiting_payment"


def test_payevo_sem_expiracao_usa_prazo_padrao(gateway_fake):
    gateway_fake.responder("POST", PAYEVO_PATH, json={"id": "pv-3", "qrcode": "00020126PIX"})

    cobranca = _criar(_payevo(gateway_fake))

    assert cobranca.expiration_date


def test_payevo_erro_de_rede(gateway_fake):
    gateway_fake.responder("POST", PAYEVO_PATH, erro=httpx.ConnectError)

    with pytest.raises(GatewayIndisponivelError):
        _criar(_payevo(gateway_fake))


def test_payevo_status_dentro_de_data(gateway_fake):
    gateway_fake.responder("GET", f"{PAYEVO_PATH}/pv-1", json={"data": {"status": "paid"}})

    status = _status(_payevo(gateway_fake), "pv-1")

    assert status.status == "paid"
    assert status.pago is True


def test_payevo_webhook_com_e_sem_envelope():
    envelope = PayevoClient.interpretar_webhook({"data": {"id": "pv-1", "status": "paid"}})
    plano = PayevoClient.interpretar_webhook({"id": "pv-1", "status": "paid"})
    recusado = PayevoClient.interpretar_webhook({"data": {"id": "pv-1", "status": "refused"}})

    assert envelope.relevante and envelope.transaction_id == "pv-1"
    assert plano.relevante and plano.transaction_id == "pv-1"
    assert not recusado.relevante


def test_payevo_sem_secret_key():
    with pytest.raises(GatewayNaoConfiguradoError):
        PayevoClient(secret_key=None)
