"""Serviços de aplicação.

Troca de credencial por instalação e invocação com backoff de rate
limit. Implementações concretas de IO ficam em app/infra/.
"""

from app.services.credential_exchange import CredentialExchanger
from app.services.rate_limit import RateLimitedInvoker

__all__ = [
    "CredentialExchanger",
    "RateLimitedInvoker",
]
