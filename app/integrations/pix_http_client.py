from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, Optional

import httpx

from app.config.settings import PIX_GATEWAY_TIMEOUT_SECONDS
from app.core.exceptions import (
    GatewayIndisponivelError,
    GatewayRejeitouError,
    RespostaGatewayInvalidaError,
)
from app.utils.logger import logger


def valor_em_centavos(valor: Decimal | int | float | str) -> int:
    """
    Converte reais para centavos inteiros, arredondando meio para cima.

    Conversão com perda e de mão única: frações de centavo são descartadas e
    não há como recuperá-las a partir do valor enviado ao gateway.
    """
    dec = valor if isinstance(valor, Decimal) else Decimal(str(valor))
    return int((dec * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def como_dict(valor: Any) -> Dict[str, Any]:
    return valor if isinstance(valor, dict) else {}


def extrair_status(data: Dict[str, Any]) -> Optional[str]:
    # Gateways ora mandam o status no topo, ora dentro de `data`
    status = data.get("status")
    if status is None:
        status = como_dict(data.get("data")).get("status")
    return status


class PixHttpClient:
    """Base HTTP dos gateways PIX: timeout curto e classificação dos erros."""

    nome: str = "Gateway"

    def __init__(
        self,
        *,
        base_url: str,
        headers: Dict[str, str],
        timeout: float = PIX_GATEWAY_TIMEOUT_SECONDS,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            headers={"Content-Type": "application/json", **headers},
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    @staticmethod
    def _corpo(resp: httpx.Response) -> Any:
        try:
            return resp.json()
        except ValueError:
            return {"raw": resp.text}

    async def _request(self, method: str, url: str, *, json: Dict[str, Any] | None = None) -> Dict[str, Any]:
        try:
            resp = await self._client.request(method, url, json=json)
        except httpx.TimeoutException as e:
            logger.error(f"[{self.nome}] Timeout em {method} {url}: {e}")
            raise GatewayIndisponivelError(f"{self.nome} timeout") from e
        except httpx.HTTPError as e:
            logger.error(f"[{self.nome}] Erro de rede em {method} {url}: {e}")
            raise GatewayIndisponivelError(f"{self.nome} unavailable", details=str(e)) from e

        data = self._corpo(resp)

        if not resp.is_success:
            logger.error(f"[{self.nome}] API error status={resp.status_code} body={data}")
            raise GatewayRejeitouError(
                f"{self.nome} API error",
                details=data,
                status_code=resp.status_code if resp.status_code >= 400 else 502,
            )

        if not isinstance(data, dict):
            raise RespostaGatewayInvalidaError(f"Invalid {self.nome} response", details=data)

        return data
