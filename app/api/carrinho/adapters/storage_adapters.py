from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Optional

from app.api.carrinho.contracts.carrinho_storage_contract import ICarrinhoStorage
from app.config.settings import CARRINHO_STORAGE_DIR


class MemoriaCarrinhoStorage(ICarrinhoStorage):
    """Storage em memória (testes e processos de vida curta)."""

    def __init__(self, dados: Optional[Dict[str, str]] = None):
        self.dados: Dict[str, str] = dict(dados or {})

    def carregar(self, chave: str) -> Optional[str]:
        return self.dados.get(chave)

    def salvar(self, chave: str, valor: str) -> None:
        self.dados[chave] = valor

    def remover(self, chave: str) -> None:
        self.dados.pop(chave, None)


class ArquivoCarrinhoStorage(ICarrinhoStorage):
    """Um arquivo JSON por chave dentro de `diretorio`."""

    def __init__(self, diretorio: str | Path = CARRINHO_STORAGE_DIR):
        self.diretorio = Path(diretorio)
        self.diretorio.mkdir(parents=True, exist_ok=True)

    def _caminho(self, chave: str) -> Path:
        nome = re.sub(r"[^A-Za-z0-9_.-]", "_", chave)
        return self.diretorio / f"{nome}.json"

    def carregar(self, chave: str) -> Optional[str]:
        caminho = self._caminho(chave)
        if not caminho.exists():
            return None
        return caminho.read_text(encoding="utf-8")

    def salvar(self, chave: str, valor: str) -> None:
        caminho = self._caminho(chave)
        tmp = caminho.with_suffix(".tmp")
        tmp.write_text(valor, encoding="utf-8")
        tmp.replace(caminho)

    def remover(self, chave: str) -> None:
        self._caminho(chave).unlink(missing_ok=True)
