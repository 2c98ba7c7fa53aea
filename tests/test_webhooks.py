import pytest
from sqlalchemy.exc import SQLAlchemyError

from app.api.pedidos.repositories.repo_pedidos import PedidoRepository

HYPEPAY_WEBHOOK = "/api/pagamentos/public/webhooks/hypepay"
PAYEVO_WEBHOOK = "/api/pagamentos/public/webhooks/payevo"


def _pago_hypepay(transaction_id="hp-1"):
    return {"event": "PAYMENT_RECEIVED", "status": "PAID", "transactionId": transaction_id}


def test_hypepay_pagamento_confirma_pedido(client, db, criar_pedido):
    pedido = criar_pedido(hypepay_transaction_id="hp-1")

    resp = client.post(HYPEPAY_WEBHOOK, json=_pago_hypepay())

    assert resp.status_code == 200, resp.text
    assert resp.json() == {"received": True, "orderId": pedido.id}
    db.refresh(pedido)
    assert pedido.payment_status == "paid"
    assert pedido.status == "confirmed"


def test_reentrega_do_webhook_e_idempotente(client, db, criar_pedido, monkeypatch):
    pedido = criar_pedido(hypepay_transaction_id="hp-1")
    client.post(HYPEPAY_WEBHOOK, json=_pago_hypepay())

    def nao_deve_escrever(self, pedido_id):
        raise AssertionError("pedido já pago não deve ser atualizado de novo")

    monkeypatch.setattr(PedidoRepository, "marcar_pago_se_pendente", nao_deve_escrever)
    resp = client.post(HYPEPAY_WEBHOOK, json=_pago_hypepay())

    assert resp.status_code == 200
    assert resp.json() == {"received": True, "orderId": pedido.id, "message": "Already processed"}


@pytest.mark.parametrize(
    "payload",
    [
        {"event": "PAYMENT_CREATED", "status": "PENDING", "transactionId": "hp-1"},
        {"event": "PAYMENT_RECEIVED", "status": "PENDING", "transactionId": "hp-1"},
        {"event": "PAYMENT_REFUNDED", "status": "PAID", "transactionId": "hp-1"},
    ],
)
def test_evento_irrelevante_e_apenas_reconhecido(client, db, criar_pedido, payload):
    pedido = criar_pedido(hypepay_transaction_id="hp-1")

    resp = client.post(HYPEPAY_WEBHOOK, json=payload)

    assert resp.status_code == 200
    assert resp.json() == {"received": True}
    db.refresh(pedido)
    assert pedido.payment_status == "pending"


def test_pagamento_sem_transaction_id(client):
    resp = client.post(HYPEPAY_WEBHOOK, json={"event": "PAYMENT_RECEIVED", "status": "PAID"})

    assert resp.status_code == 400
    assert resp.json()["error"] == "Missing transactionId"


def test_transacao_desconhecida(client, criar_pedido):
    criar_pedido(hypepay_transaction_id="hp-1")

    resp = client.post(HYPEPAY_WEBHOOK, json=_pago_hypepay("hp-404"))

    assert resp.status_code == 404
    assert resp.json()["error"] == "Order not found"


def test_transaction_id_de_outro_gateway_nao_casa(client, criar_pedido):
    criar_pedido(payevo_transaction_id="tx-1")

    resp = client.post(HYPEPAY_WEBHOOK, json=_pago_hypepay("tx-1"))

    assert resp.status_code == 404


def test_falha_de_banco_responde_500(client, criar_pedido, monkeypatch):
    criar_pedido(hypepay_transaction_id="hp-1")

    def explode(self, **kwargs):
        raise SQLAlchemyError("conexão perdida")

    monkeypatch.setattr(PedidoRepository, "get_by_transaction_id", explode)
    resp = client.post(HYPEPAY_WEBHOOK, json=_pago_hypepay())

    assert resp.status_code == 500
    assert resp.json()["error"] == "Database error"


def test_falha_ao_atualizar_responde_500_e_mantem_pendente(client, db, criar_pedido, monkeypatch):
    pedido = criar_pedido(hypepay_transaction_id="hp-1")

    def explode(self, pedido_id):
        raise SQLAlchemyError("lock timeout")

    monkeypatch.setattr(PedidoRepository, "marcar_pago_se_pendente", explode)
    resp = client.post(HYPEPAY_WEBHOOK, json=_pago_hypepay())

    assert resp.status_code == 500
    assert resp.json()["error"] == "Failed to update order"
    db.refresh(pedido)
    assert pedido.payment_status == "pending"


@pytest.mark.parametrize(
    "payload",
    [
        {"data": {"id": "pv-1", "status": "paid"}},
        {"id": "pv-1", "status": "paid"},
    ],
)
def test_payevo_pagamento_confirma_pedido(client, db, criar_pedido, payload):
    pedido = criar_pedido(payevo_transaction_id="pv-1")

    resp = client.post(PAYEVO_WEBHOOK, json=payload)

    assert resp.status_code == 200, resp.text
    assert resp.json()["orderId"] == pedido.id
    db.refresh(pedido)
    assert pedido.payment_status == "paid"
    assert pedido.status == "confirmed"


def test_payevo_status_de_falha_nao_altera_pedido(client, db, criar_pedido):
    pedido = criar_pedido(payevo_transaction_id="pv-1")

    resp = client.post(PAYEVO_WEBHOOK, json={"data": {"id": "pv-1", "status": "refused"}})

    assert resp.status_code == 200
    assert resp.json() == {"received": True}
    db.refresh(pedido)
    assert pedido.payment_status == "pending"
    assert pedido.status == "pending"


def test_healthcheck_do_webhook(client):
    resp = client.get(PAYEVO_WEBHOOK)

    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_gateway_desconhecido(client):
    resp = client.post("/api/pagamentos/public/webhooks/stripe", json={})

    assert resp.status_code == 422


def test_payevo_sem_transaction_id_e_400_mesmo_sem_pagamento(client):
    resp = client.post(PAYEVO_WEBHOOK, json={"data": {"status": "refused"}})

    assert resp.status_code == 400
    assert resp.json()["error"] == "Missing transactionId"
