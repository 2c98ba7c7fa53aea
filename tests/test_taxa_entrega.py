from decimal import Decimal

from app.api.entregas.schemas.schema_zona_entrega import ZonaEntregaOut
from app.api.entregas.services.service_taxa_entrega import calcular_taxa_entrega, formatar_cep

CENTRO = ZonaEntregaOut(
    zip_code_start="01000000",
    zip_code_end="01999999",
    neighborhood="Centro",
    delivery_fee=Decimal("8.00"),
    delivery_time=30,
)
PAULISTA = ZonaEntregaOut(
    zip_code_start="01300-000",
    zip_code_end="01399-999",
    neighborhood="Paulista",
    delivery_fee=Decimal("12.00"),
    delivery_time=45,
)


def test_cep_dentro_da_faixa():
    resultado = calcular_taxa_entrega("01310-100", [CENTRO])

    assert resultado.found is True
    assert resultado.fee == Decimal("8.00")
    assert resultado.time == 30
    assert resultado.zone.neighborhood == "Centro"


def test_limites_da_faixa_sao_inclusivos():
    assert calcular_taxa_entrega("01000-000", [CENTRO]).found
    assert calcular_taxa_entrega("01999-999", [CENTRO]).found


def test_cep_fora_das_zonas():
    resultado = calcular_taxa_entrega("99999-999", [CENTRO])

    assert resultado.found is False
    assert resultado.zone is None
    assert resultado.fee == Decimal("0")
    assert resultado.time == 0


def test_cep_com_tamanho_invalido_nao_e_encontrado():
    assert not calcular_taxa_entrega("0131", [CENTRO]).found
    assert not calcular_taxa_entrega("013101001", [CENTRO]).found
    assert not calcular_taxa_entrega("", [CENTRO]).found


def test_primeira_zona_na_ordem_vence_em_sobreposicao():
    assert calcular_taxa_entrega("01310100", [CENTRO, PAULISTA]).fee == Decimal("8.00")
    assert calcular_taxa_entrega("01310100", [PAULISTA, CENTRO]).fee == Decimal("12.00")


def test_formatar_cep():
    assert formatar_cep("01310100") == "01310-100"
    assert formatar_cep("01310") == "01310"
    assert formatar_cep("013101") == "01310-1"
    assert formatar_cep("01.310-1009999") == "01310-100"


def test_endpoint_taxa_entrega(client, criar_zona):
    criar_zona("01000000", "01999999", "8.00", 30, neighborhood="Centro")

    resp = client.get("/api/entregas/public/taxa", params={"cep": "01310-100"})

    assert resp.status_code == 200, resp.text
    body = resp.json()
    assert body["found"] is True
    assert Decimal(str(body["fee"])) == Decimal("8")
    assert body["time"] == 30


def test_endpoint_ignora_zonas_inativas(client, criar_zona):
    criar_zona("01000000", "01999999", "8.00", 30, is_active=False)

    resp = client.get("/api/entregas/public/taxa", params={"cep": "01310100"})

    assert resp.status_code == 200
    assert resp.json()["found"] is False


def test_endpoint_usa_zona_de_menor_inicio(client, criar_zona):
    criar_zona("01300000", "01399999", "12.00", 45)
    criar_zona("01000000", "01999999", "8.00", 30)

    resp = client.get("/api/entregas/public/taxa", params={"cep": "01310100"})

    assert Decimal(str(resp.json()["fee"])) == Decimal("8")
