from datetime import datetime, timedelta, timezone
from typing import Optional
from zoneinfo import ZoneInfo

TZ_SP = ZoneInfo('America/Sao_Paulo')


def now_trimmed():
    """Retorna datetime atual em timezone de São Paulo, sem microsegundos"""
    return datetime.now(TZ_SP).replace(microsecond=0)


def expiracao_iso(minutos: int, agora: Optional[datetime] = None) -> str:
    """Timestamp ISO-8601 (UTC) `minutos` à frente de `agora`."""
    base = agora or datetime.now(timezone.utc)
    return (base + timedelta(minutes=minutos)).isoformat()
