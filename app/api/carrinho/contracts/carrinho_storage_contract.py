from abc import ABC, abstractmethod
from typing import Optional


class ICarrinhoStorage(ABC):
    """Contrato de armazenamento chave/valor durável usado pelo carrinho."""

    @abstractmethod
    def carregar(self, chave: str) -> Optional[str]:
        raise NotImplementedError

    @abstractmethod
    def salvar(self, chave: str, valor: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def remover(self, chave: str) -> None:
        raise NotImplementedError
