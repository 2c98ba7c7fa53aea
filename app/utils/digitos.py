import re
from typing import Optional

_NAO_DIGITO = re.compile(r"\D")


def somente_digitos(valor: Optional[str]) -> str:
    """Remove tudo que não for dígito (máscaras de CEP, telefone, documento)."""
    if not valor:
        return ""
    return _NAO_DIGITO.sub("", str(valor))


def limpar_telefone(telefone: Optional[str]) -> str:
    """
    Telefone no formato aceito pelos gateways PIX: somente dígitos, sem
    prefixar código de país.
    """
    return somente_digitos(telefone)
