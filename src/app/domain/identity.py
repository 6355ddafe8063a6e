"""Identidade da App e credenciais derivadas.

AppIdentity é carregada uma única vez no bootstrap e repassada
explicitamente ao emissor de asserções e ao trocador de credenciais.
Nenhuma lógica do núcleo lê variáveis de ambiente diretamente.
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from datetime import datetime

# Janela de validade da asserção (segundos)
ASSERTION_BACKDATE_SECONDS = 60
ASSERTION_TTL_SECONDS = 600


@dataclass(frozen=True, slots=True)
class AppIdentity:
    """Identidade da App perante a plataforma.

    Attributes:
        app_id: Identificador numérico da App (aceita str vinda de env)
        private_key: Chave privada RSA em PEM
    """

    app_id: int | str | None
    private_key: str | None

    def __repr__(self) -> str:
        # Nunca expor a chave em logs/tracebacks
        return f"AppIdentity(app_id={self.app_id!r}, private_key=<redacted>)"


@dataclass(frozen=True, slots=True)
class SignedAssertion:
    """Asserção assinada (JWT RS256) que prova a identidade da App."""

    issued_at: int
    expires_at: int
    issuer: int
    token: str

    @property
    def signature(self) -> bytes:
        """Bytes da assinatura (terceiro segmento do JWS compacto)."""
        segment = self.token.rsplit(".", 1)[-1]
        padded = segment + ("=" * (-len(segment) % 4))
        return base64.urlsafe_b64decode(padded)

    @property
    def lifetime_seconds(self) -> int:
        return self.expires_at - self.issued_at

    def authorization_header(self) -> str:
        return f"Bearer {self.token}"


@dataclass(frozen=True, slots=True)
class TenantCredential:
    """Token de acesso escopado a uma instalação (tenant).

    Vive apenas durante um dispatch; não é cacheado nem compartilhado.
    """

    tenant_id: int
    access_token: str
    expires_at: datetime | None = None

    def __repr__(self) -> str:
        return (
            f"TenantCredential(tenant_id={self.tenant_id}, "
            f"access_token=<redacted>, expires_at={self.expires_at!r})"
        )
